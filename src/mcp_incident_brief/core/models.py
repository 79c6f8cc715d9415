"""Core data models for incident briefs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

SignalValue = int | float | str

DEFAULT_SCENARIO = "Uploaded Incident"
UNKNOWN_SERVICE = "BTP Service (unknown)"
UNKNOWN_REGION = "unknown"

SIGNAL_KEYS: tuple[str, ...] = (
    "log_lines",
    "errors",
    "warns",
    "infos",
    "timeouts",
    "http_5xx",
    "error_rate_pct",
)


class Severity(str, Enum):
    """Incident impact tier derived from signal thresholds."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Confidence(str, Enum):
    """How much sample evidence backs the severity call."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """First and last timestamp seen, in document order (not sorted)."""

    start: str | None = None
    end: str | None = None


@dataclass(frozen=True, slots=True)
class PatternCount:
    pattern: str
    count: int


@dataclass(frozen=True, slots=True)
class ParsedIncident:
    """Parser output: guesses, window, patterns, sample and derived signals."""

    service_guess: str
    region_guess: str
    time_window: TimeWindow
    top_patterns: tuple[PatternCount, ...]
    sample_lines: tuple[str, ...]
    derived_signals: Mapping[str, SignalValue]


@dataclass(frozen=True, slots=True)
class AnalysisInput:
    """Analyzer payload (usually built from a ParsedIncident)."""

    logs: tuple[str, ...]
    signals: Mapping[str, SignalValue] = field(default_factory=dict)
    scenario: str = DEFAULT_SCENARIO
    service: str = UNKNOWN_SERVICE
    region: str = UNKNOWN_REGION


@dataclass(frozen=True, slots=True)
class AnalysisOutput:
    """Rule-engine output: categorical calls plus canned narrative."""

    severity: Severity
    confidence: Confidence
    summary: str
    root_cause: str
    actions: tuple[str, ...]
    business_impact: str
    btp_next_steps: tuple[str, ...]
    signal_highlights: tuple[str, ...]
    executive_one_liner: str
