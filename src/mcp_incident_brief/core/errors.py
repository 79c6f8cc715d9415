"""Error taxonomy surfaced at the tool boundary."""

from __future__ import annotations


class IncidentBriefError(Exception):
    """Base class for errors raised by the incident brief pipeline."""

    status_code: int = 500


class InvalidInput(IncidentBriefError, ValueError):
    """Empty or missing required input (4xx-equivalent)."""

    status_code = 400


class UnexpectedFault(IncidentBriefError, RuntimeError):
    """Any other processing failure (5xx-equivalent)."""

    status_code = 500
