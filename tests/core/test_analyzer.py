from __future__ import annotations

import math

import pytest

from mcp_incident_brief.core.analyzer import (
    analyze_incident,
    compose_root_cause,
    format_number,
    signal_highlights,
)
from mcp_incident_brief.core.errors import InvalidInput
from mcp_incident_brief.core.models import AnalysisInput, Confidence, Severity
from mcp_incident_brief.core.parser import parse_incident
from mcp_incident_brief.core.brief import analysis_input_from_incident
from mcp_incident_brief.core.rules import ACTIONS, BTP_NEXT_STEPS, NARRATIVES, ROOT_CAUSE_FALLBACK

THREE_LOGS = ("a", "b", "c")


def _analyze(signals: dict, logs: tuple[str, ...] = THREE_LOGS):
    return analyze_incident(AnalysisInput(logs=logs, signals=signals))


@pytest.mark.parametrize(
    ("signals", "expected"),
    [
        ({"http_5xx": 2, "timeouts": 0, "errors": 0, "error_rate_pct": 0}, Severity.HIGH),
        ({"timeouts": "2"}, Severity.HIGH),
        ({"error_rate_pct": 3}, Severity.HIGH),
        ({"error_rate_pct": "2.9", "errors": 1}, Severity.MEDIUM),
        ({"http_5xx": 1}, Severity.MEDIUM),
        ({"timeouts": 1}, Severity.MEDIUM),
        ({"errors": 1}, Severity.MEDIUM),
        ({"warns": 40}, Severity.LOW),
        ({}, Severity.LOW),
        ({"errors": "abc", "http_5xx": math.nan, "timeouts": None}, Severity.LOW),
    ],
)
def test_severity_thresholds(signals: dict, expected: Severity) -> None:
    assert _analyze(signals).severity is expected


def test_confidence_low_for_thin_sample_even_when_high_holds() -> None:
    out = _analyze({"http_5xx": 5, "timeouts": 5, "errors": 5}, logs=("a", "b"))
    assert out.confidence is Confidence.LOW


def test_confidence_high_with_enough_lines_and_hits() -> None:
    logs = tuple(f"line {i}" for i in range(6))
    out = _analyze({"timeouts": 1, "http_5xx": 1}, logs=logs)
    assert out.confidence is Confidence.HIGH


def test_confidence_medium_by_default() -> None:
    out = _analyze({"timeouts": 0, "http_5xx": 0, "errors": 0}, logs=("a", "b", "c", "d"))
    assert out.confidence is Confidence.MEDIUM


def test_confidence_medium_when_hits_below_two() -> None:
    logs = tuple(f"line {i}" for i in range(8))
    assert _analyze({"errors": 1}, logs=logs).confidence is Confidence.MEDIUM


def test_root_cause_clauses_in_fixed_order() -> None:
    logs = ["no scale event", "Upstream Timeout on /token", "x TOKEN_VALIDATION slow"]
    assert compose_root_cause(logs) == (
        "Most likely driver: authentication token validation latency (XSUAA/IdP path); "
        "upstream dependency timeouts amplifying end-user auth latency; "
        "capacity ceiling reached (autoscaler max) during demand spike."
    )


def test_root_cause_fallback() -> None:
    assert compose_root_cause(["all quiet"]) == ROOT_CAUSE_FALLBACK


@pytest.mark.parametrize("severity", list(Severity))
def test_narrative_follows_severity_table(severity: Severity) -> None:
    signals = {
        Severity.HIGH: {"http_5xx": 2},
        Severity.MEDIUM: {"errors": 1},
        Severity.LOW: {},
    }[severity]
    out = _analyze(signals)
    assert out.severity is severity
    narrative = NARRATIVES[severity]
    assert out.summary == narrative.summary
    assert out.business_impact == narrative.business_impact
    assert out.executive_one_liner == narrative.executive_one_liner


def test_actions_are_constant() -> None:
    low = _analyze({})
    high = _analyze({"http_5xx": 9}, logs=("upstream timeout",) * 7)
    assert low.actions == high.actions == ACTIONS
    assert low.btp_next_steps == high.btp_next_steps == BTP_NEXT_STEPS
    assert len(ACTIONS) == 5
    assert len(BTP_NEXT_STEPS) == 5


def test_signal_highlights_format() -> None:
    signals = {
        "log_lines": 10,
        "errors": "2",
        "warns": 1,
        "timeouts": 0,
        "http_5xx": 3,
        "error_rate_pct": 20.0,
    }
    assert signal_highlights(signals) == (
        "log lines: 10",
        "errors: 2",
        "warnings: 1",
        "timeouts: 0",
        "HTTP 5xx: 3",
        "error rate: 20%",
    )
    assert signal_highlights({"error_rate_pct": 33.3})[-1] == "error rate: 33.3%"
    assert signal_highlights(None)[0] == "log lines: 0"


def test_format_number() -> None:
    assert format_number(2.0) == "2"
    assert format_number(6.3) == "6.3"
    assert format_number(0) == "0"


def test_empty_logs_rejected() -> None:
    with pytest.raises(InvalidInput, match="No logs provided"):
        analyze_incident(AnalysisInput(logs=(), signals={"errors": 3}))


def test_analyze_is_idempotent() -> None:
    data = AnalysisInput(
        logs=("x ERROR upstream timeout", "y circuit breaker open", "z"),
        signals={"errors": 1, "timeouts": 1, "http_5xx": 1},
    )
    assert analyze_incident(data) == analyze_incident(data)


def test_parsed_auth_incident_feeds_analyzer(auth_text: str) -> None:
    incident = parse_incident(auth_text)
    out = analyze_incident(analysis_input_from_incident(incident))

    # One error in two lines is a 50% error rate, which outranks the 5xx rule.
    assert out.severity is Severity.HIGH
    assert out.confidence is Confidence.LOW
    assert "upstream dependency timeouts" in out.root_cause
    assert "circuit breaker activation" in out.root_cause
    assert out.signal_highlights[-1] == "error rate: 50%"


def test_parsed_incident_without_error_rate_is_medium() -> None:
    incident = parse_incident(
        '2026-01-06T13:01:02.114Z service="auth" region="eu10" WARN upstream timeout\n'
        '2026-01-06T13:02:00.000Z service="auth" region="eu10" httpStatus=503 circuit breaker open'
    )
    out = analyze_incident(analysis_input_from_incident(incident))
    assert out.severity is Severity.MEDIUM
