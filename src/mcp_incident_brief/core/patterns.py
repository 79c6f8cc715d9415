"""Line classification tokens and pattern-tag heuristics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PatternRule:
    """Tag a line when any token occurs in its upper-cased text."""

    tag: str
    tokens: Sequence[str]

    def matches(self, upper_line: str) -> bool:
        return any(tok in upper_line for tok in self.tokens)


@dataclass(frozen=True)
class ScanConfig:
    """Upper-case substrings driving per-line classification and tagging.

    ``levels`` is checked in order and the first hit wins, so a line is never
    counted twice. ``patterns`` are independent: one line may feed several tags.
    """

    levels: Sequence[tuple[str, str]]
    timeout_token: str
    patterns: Sequence[PatternRule]


def default_scan_config() -> ScanConfig:
    """Default tokens (whole-word level markers, substring heuristics)."""
    return ScanConfig(
        levels=(
            ("errors", " ERROR "),
            ("warns", " WARN "),
            ("infos", " INFO "),
        ),
        timeout_token="TIMEOUT",
        patterns=(
            PatternRule("token_validation_slow", ("TOKEN_VALIDATION",)),
            PatternRule("upstream_timeout", ("UPSTREAM TIMEOUT",)),
            PatternRule("downstream_instability", ("DOWNSTREAM",)),
            PatternRule("circuit_breaker_open", ("CIRCUIT BREAKER",)),
            PatternRule("autoscaler_max_reached", ("NO SCALE EVENT", "MAX REACHED")),
        ),
    )


def classify_level(upper_line: str, cfg: ScanConfig) -> str | None:
    """Return the counter name of the first level token found, if any."""
    for counter, token in cfg.levels:
        if token in upper_line:
            return counter
    return None


def match_patterns(upper_line: str, cfg: ScanConfig) -> list[str]:
    """Return every pattern tag whose rule matches the line."""
    return [rule.tag for rule in cfg.patterns if rule.matches(upper_line)]
