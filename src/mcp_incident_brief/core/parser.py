"""Log text -> ParsedIncident.

Single pass over the non-empty, trimmed lines of the input. Counters,
key/value guesses, timestamps and pattern tags are all collected in document
order so that ties and the time window are deterministic.
"""

from __future__ import annotations

import logging
import math
import re
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .errors import InvalidInput
from .kv import find_iso_timestamp, is_http_5xx, parse_key_values, status_value
from .markup import strip_rtf, trim
from .models import (
    UNKNOWN_REGION,
    UNKNOWN_SERVICE,
    ParsedIncident,
    PatternCount,
    SignalValue,
    TimeWindow,
)
from .patterns import ScanConfig, classify_level, default_scan_config, match_patterns

LOGGER = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r?\n")


@dataclass(frozen=True, slots=True)
class ParserConfig:
    sample_size: int = 10
    max_patterns: int = 6
    unknown_service: str = UNKNOWN_SERVICE
    unknown_region: str = UNKNOWN_REGION


def split_lines(text: str) -> list[str]:
    """Split on line breaks, trim each line and drop empties."""
    return [s for s in (trim(part) for part in _LINE_SPLIT_RE.split(text)) if s]


def pick_most_common(values: Sequence[str], fallback: str) -> str:
    """Most frequent value; the first-seen value wins ties."""
    if not values:
        return fallback
    counts = Counter(values)
    # Counter keeps insertion order and max() returns the first maximum.
    best = max(counts, key=counts.__getitem__)
    return best or fallback


def error_rate_pct(errors: int, log_lines: int) -> float:
    """Errors per line as a percentage, rounded half-up to one decimal."""
    if log_lines <= 0:
        return 0.0
    return math.floor(errors / log_lines * 1000 + 0.5) / 10


def rank_patterns(counts: dict[str, int], limit: int) -> tuple[PatternCount, ...]:
    """Top tags by count; sorted() is stable so first-encountered wins ties."""
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return tuple(PatternCount(pattern=tag, count=n) for tag, n in ranked[:limit] if n > 0)


def parse_lines(
    lines: Iterable[str],
    *,
    scan: ScanConfig | None = None,
    cfg: ParserConfig | None = None,
) -> ParsedIncident:
    """Derive a ParsedIncident from already tokenized lines."""
    if scan is None:
        scan = default_scan_config()
    if cfg is None:
        cfg = ParserConfig()

    lines = list(lines)
    levels = {counter: 0 for counter, _ in scan.levels}
    timeouts = 0
    http_5xx = 0
    services: list[str] = []
    regions: list[str] = []
    timestamps: list[str] = []
    pattern_counts: dict[str, int] = {}

    for line in lines:
        upper = line.upper()

        counter = classify_level(upper, scan)
        if counter is not None:
            levels[counter] += 1

        if scan.timeout_token in upper:
            timeouts += 1

        fields = parse_key_values(line)
        if fields.get("service"):
            services.append(fields["service"])
        if fields.get("region"):
            regions.append(fields["region"])

        ts = find_iso_timestamp(line)
        if ts:
            timestamps.append(ts)

        if is_http_5xx(status_value(fields)):
            http_5xx += 1

        for tag in match_patterns(upper, scan):
            pattern_counts[tag] = pattern_counts.get(tag, 0) + 1

    log_lines = len(lines)
    errors = levels.get("errors", 0)
    signals: dict[str, SignalValue] = {
        "log_lines": log_lines,
        "errors": errors,
        "warns": levels.get("warns", 0),
        "infos": levels.get("infos", 0),
        "timeouts": timeouts,
        "http_5xx": http_5xx,
        "error_rate_pct": error_rate_pct(errors, log_lines),
    }

    return ParsedIncident(
        service_guess=pick_most_common(services, cfg.unknown_service),
        region_guess=pick_most_common(regions, cfg.unknown_region),
        time_window=TimeWindow(
            start=timestamps[0] if timestamps else None,
            end=timestamps[-1] if timestamps else None,
        ),
        top_patterns=rank_patterns(pattern_counts, cfg.max_patterns),
        sample_lines=tuple(lines[: min(cfg.sample_size, log_lines)]),
        derived_signals=signals,
    )


def parse_incident(
    raw_text: str,
    *,
    scan: ScanConfig | None = None,
    cfg: ParserConfig | None = None,
) -> ParsedIncident:
    """Parse raw (optionally RTF-wrapped) log text into a ParsedIncident.

    Raises
    ------
    InvalidInput
        When nothing is left after unwrapping and trimming.
    """
    text = trim(strip_rtf(raw_text or ""))
    if not text:
        raise InvalidInput("No text provided")

    incident = parse_lines(split_lines(text), scan=scan, cfg=cfg)
    LOGGER.debug(
        "Parsed %s lines (service=%s region=%s patterns=%s)",
        incident.derived_signals["log_lines"],
        incident.service_guess,
        incident.region_guess,
        len(incident.top_patterns),
    )
    return incident
