"""Signals + sample logs -> AnalysisOutput.

Stateless rule engine: thresholds decide severity and confidence, the rule
table in :mod:`.rules` supplies every narrative fragment.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .errors import InvalidInput
from .kv import to_number
from .models import AnalysisInput, AnalysisOutput, Confidence, Severity, SignalValue
from .rules import (
    ACTIONS,
    BTP_NEXT_STEPS,
    HIGHLIGHT_FIELDS,
    NARRATIVES,
    ROOT_CAUSE_FALLBACK,
    ROOT_CAUSE_PREFIX,
    ROOT_CAUSE_RULES,
    ConfidenceThresholds,
    RootCauseRule,
    SeverityThresholds,
)


def signal_number(signals: Mapping[str, SignalValue] | None, key: str) -> float:
    """Numeric signal value; missing, unparseable or non-finite values are 0."""
    if not signals:
        return 0.0
    n = to_number(signals.get(key))
    return 0.0 if n is None else n


def format_number(n: float) -> str:
    """Render integral values without a trailing ``.0``."""
    if float(n).is_integer():
        return str(int(n))
    return repr(float(n))


def decide_severity(
    *,
    errors: float,
    timeouts: float,
    http_5xx: float,
    error_rate_pct: float,
    thresholds: SeverityThresholds | None = None,
) -> Severity:
    t = thresholds or SeverityThresholds()
    if (
        http_5xx >= t.high_http_5xx
        or timeouts >= t.high_timeouts
        or error_rate_pct >= t.high_error_rate_pct
    ):
        return Severity.HIGH
    if http_5xx >= t.medium_http_5xx or timeouts >= t.medium_timeouts or errors >= t.medium_errors:
        return Severity.MEDIUM
    return Severity.LOW


def decide_confidence(
    *,
    log_count: int,
    errors: float,
    timeouts: float,
    http_5xx: float,
    thresholds: ConfidenceThresholds | None = None,
) -> Confidence:
    """Medium by default; a thin sample (< 3 lines) always ends up Low."""
    t = thresholds or ConfidenceThresholds()
    confidence = Confidence.MEDIUM
    if log_count >= t.high_min_logs and (timeouts + http_5xx + errors) >= t.high_min_hits:
        confidence = Confidence.HIGH
    if log_count < t.low_below_logs:
        confidence = Confidence.LOW
    return confidence


def compose_root_cause(
    logs: Sequence[str],
    rules: Sequence[RootCauseRule] = ROOT_CAUSE_RULES,
) -> str:
    lowered = [line.lower() for line in logs]
    parts = [r.clause for r in rules if any(r.needle in line for line in lowered)]
    if not parts:
        return ROOT_CAUSE_FALLBACK
    return f"{ROOT_CAUSE_PREFIX}{'; '.join(parts)}."


def signal_highlights(signals: Mapping[str, SignalValue] | None) -> tuple[str, ...]:
    return tuple(
        f"{label}: {format_number(signal_number(signals, key))}{suffix}"
        for label, key, suffix in HIGHLIGHT_FIELDS
    )


def analyze_incident(data: AnalysisInput) -> AnalysisOutput:
    """Map signals and sample logs to a templated incident brief.

    Raises
    ------
    InvalidInput
        When ``data.logs`` is empty.
    """
    logs = tuple(data.logs or ())
    if not logs:
        raise InvalidInput("No logs provided")

    signals = data.signals
    errors = signal_number(signals, "errors")
    timeouts = signal_number(signals, "timeouts")
    http_5xx = signal_number(signals, "http_5xx")
    error_rate = signal_number(signals, "error_rate_pct")

    severity = decide_severity(
        errors=errors,
        timeouts=timeouts,
        http_5xx=http_5xx,
        error_rate_pct=error_rate,
    )
    confidence = decide_confidence(
        log_count=len(logs),
        errors=errors,
        timeouts=timeouts,
        http_5xx=http_5xx,
    )
    narrative = NARRATIVES[severity]

    return AnalysisOutput(
        severity=severity,
        confidence=confidence,
        summary=narrative.summary,
        root_cause=compose_root_cause(logs),
        actions=ACTIONS,
        business_impact=narrative.business_impact,
        btp_next_steps=BTP_NEXT_STEPS,
        signal_highlights=signal_highlights(signals),
        executive_one_liner=narrative.executive_one_liner,
    )
