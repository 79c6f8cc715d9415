"""Helpers for key=value fields embedded in free-form log lines."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence

_KV_RE = re.compile(r'(\w+)=(".*?"|[^\s]+)')
_ISO_TS_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?Z")

STATUS_KEYS: Sequence[str] = ("httpStatus", "status")


def parse_key_values(line: str) -> dict[str, str]:
    """Return ``key=value`` / ``key="quoted value"`` pairs; later keys win."""
    fields: dict[str, str] = {}
    for m in _KV_RE.finditer(line):
        value = m.group(2)
        if value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        fields[m.group(1)] = value
    return fields


def find_iso_timestamp(line: str) -> str | None:
    """Return the first ``YYYY-MM-DDTHH:MM:SS(.fff)Z`` timestamp in the line."""
    m = _ISO_TS_RE.search(line)
    return m.group(0) if m else None


def status_value(fields: Mapping[str, str], keys: Sequence[str] = STATUS_KEYS) -> str:
    """Return the first status-like field present (even if empty)."""
    for key in keys:
        if key in fields:
            return fields[key]
    return ""


def to_number(value: object) -> float | None:
    """Coerce a signal value to a finite float, or None when impossible."""
    if isinstance(value, (int, float)):
        try:
            n = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            # Blank strings count as zero, like a missing counter.
            return 0.0
        if "_" in text:
            # float() accepts digit separators ("5_03"); counters never carry them.
            return None
        try:
            n = float(text)
        except ValueError:
            return None
    else:
        return None
    return n if math.isfinite(n) else None


def is_http_5xx(value: str) -> bool:
    n = to_number(value)
    return n is not None and 500 <= n <= 599
