"""Rich-text unwrapping for pasted or uploaded RTF documents."""

from __future__ import annotations

import re

RTF_SIGNATURE = "{\\rtf"

_PAR_RE = re.compile(r"\\pard?")
_HEX_RE = re.compile(r"\\'([0-9a-fA-F]{2})")
_GROUP_RE = re.compile(r"\{\\\*?[^{}]*\}")
_CONTROL_WORD_RE = re.compile(r"\\[a-zA-Z]+\d* ?")
_BRACE_RE = re.compile(r"[{}]")
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_EDGE_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def trim(text: str) -> str:
    """Strip surrounding whitespace, including byte-order marks left by editors."""
    return _EDGE_RE.sub("", text or "")


def is_rtf(text: str) -> bool:
    """Return True when the text looks like an RTF document."""
    return trim(text).startswith(RTF_SIGNATURE)


def strip_rtf(text: str) -> str:
    """Strip RTF control sequences, or return the text unchanged if it is not RTF.

    Only flat groups (font/color tables, ``{\\*...}`` destinations) are dropped;
    the outer document group is unwrapped by removing its braces.
    """
    if not is_rtf(text):
        return text

    out = trim(text)
    out = _PAR_RE.sub("\n", out)
    out = _HEX_RE.sub(lambda m: chr(int(m.group(1), 16)), out)
    out = _GROUP_RE.sub("", out)
    out = _CONTROL_WORD_RE.sub("", out)
    out = _BRACE_RE.sub("", out)
    out = _BLANK_RUN_RE.sub("\n\n", out)
    return trim(out)
