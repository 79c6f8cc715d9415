"""Rule table for the analyzer: thresholds and canned narrative fragments."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .models import Severity


@dataclass(frozen=True, slots=True)
class Narrative:
    summary: str
    business_impact: str
    executive_one_liner: str


@dataclass(frozen=True, slots=True)
class RootCauseRule:
    """Contribute ``clause`` when ``needle`` occurs in any (lower-cased) log line."""

    needle: str
    clause: str


@dataclass(frozen=True, slots=True)
class SeverityThresholds:
    high_http_5xx: float = 2
    high_timeouts: float = 2
    high_error_rate_pct: float = 3
    medium_http_5xx: float = 1
    medium_timeouts: float = 1
    medium_errors: float = 1


@dataclass(frozen=True, slots=True)
class ConfidenceThresholds:
    high_min_logs: int = 6
    high_min_hits: float = 2
    low_below_logs: int = 3


NARRATIVES: Mapping[Severity, Narrative] = {
    Severity.HIGH: Narrative(
        summary=(
            "Signals show a material deviation from normal performance, including elevated "
            "timeouts and 5xx responses, likely impacting user authentication and downstream "
            "API reliability."
        ),
        business_impact=(
            "High risk of SLA breach and customer-facing disruption (login failures / failed "
            "API calls), with potential revenue and reputational impact if not mitigated quickly."
        ),
        executive_one_liner=(
            "We are seeing elevated auth latency and 5xx errors consistent with dependency "
            "timeouts under load; containment and scaling guardrails are required immediately."
        ),
    ),
    Severity.MEDIUM: Narrative(
        summary=(
            "Signals indicate intermittent degradation (timeouts/5xx) that could escalate under "
            "load and affect user-facing flows."
        ),
        business_impact=(
            "Moderate risk of incident escalation and partial customer impact; proactive "
            "remediation will reduce MTTR and avoid repeated occurrences."
        ),
        executive_one_liner=(
            "Early indicators of reliability drift (timeouts/5xx); correlating with releases and "
            "tuning scaling/alerts will prevent escalation."
        ),
    ),
    Severity.LOW: Narrative(
        summary="Signals suggest minor anomalies; monitor closely and validate baseline thresholds.",
        business_impact=(
            "Low immediate customer impact; use the event to harden detection and operational "
            "guardrails."
        ),
        executive_one_liner=(
            "Minor anomalies detected; we will validate baselines and strengthen alerting to "
            "prevent future drift."
        ),
    ),
}

ROOT_CAUSE_RULES: Sequence[RootCauseRule] = (
    RootCauseRule(
        "token_validation",
        "authentication token validation latency (XSUAA/IdP path)",
    ),
    RootCauseRule(
        "upstream timeout",
        "upstream dependency timeouts amplifying end-user auth latency",
    ),
    RootCauseRule(
        "circuit breaker",
        "circuit breaker activation indicates repeated downstream failures",
    ),
    RootCauseRule(
        "no scale event",
        "capacity ceiling reached (autoscaler max) during demand spike",
    ),
)

ROOT_CAUSE_PREFIX = "Most likely driver: "
ROOT_CAUSE_FALLBACK = (
    "Most likely driver: dependency latency and intermittent gateway errors under load."
)

# Constant for every input; severity does not tailor them.
ACTIONS: tuple[str, ...] = (
    "Confirm blast radius (tenant(s), routes, and time window) and set incident bridge + owner.",
    "Correlate spikes with recent deployments/config changes and dependency health in the same region.",
    "Add/validate SLOs: auth latency (p95), 5xx rate, and upstream timeout rate; alert on burn-rate thresholds.",
    "Raise or re-tune autoscaler limits and validate backpressure/timeouts to prevent cascading failure.",
    "Implement a short-term mitigation (fallback, cache, or retry policy) and a runbook for repeatability.",
)

BTP_NEXT_STEPS: tuple[str, ...] = (
    "Enable/confirm central log and metric collection for the involved subaccount/space and export to a single dashboard.",
    "Create an SLO panel for Auth (XSUAA) latency and HTTP 5xx with alerting to the on-call channel.",
    "Add release correlation tags (app version, deployment id) to logs to speed MTTR.",
    "Define an incident runbook: triage checklist, escalation paths, rollback criteria, and comms template.",
    "Introduce cost guardrails (autoscaling + quota checks) to avoid overcorrecting with spend.",
)

# (label, signal key, suffix)
HIGHLIGHT_FIELDS: Sequence[tuple[str, str, str]] = (
    ("log lines", "log_lines", ""),
    ("errors", "errors", ""),
    ("warnings", "warns", ""),
    ("timeouts", "timeouts", ""),
    ("HTTP 5xx", "http_5xx", ""),
    ("error rate", "error_rate_pct", "%"),
)
