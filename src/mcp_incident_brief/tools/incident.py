"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from pydantic import ValidationError

from mcp_incident_brief.core.analyzer import analyze_incident
from mcp_incident_brief.core.brief import (
    analysis_input_from_incident,
    render_executive_summary,
    render_markdown_brief,
)
from mcp_incident_brief.core.errors import IncidentBriefError, InvalidInput, UnexpectedFault
from mcp_incident_brief.core.parser import parse_incident
from mcp_incident_brief.core.source import read_text

from .schemas import AnalysisModel, AnalyzeRequest, IncidentModel

LOGGER = logging.getLogger(__name__)


@contextmanager
def _fault_boundary(operation: str) -> Iterator[None]:
    """Let known errors through; wrap anything else as UnexpectedFault."""
    try:
        yield
    except (IncidentBriefError, FileNotFoundError):
        raise
    except Exception as e:
        LOGGER.exception("%s failed", operation)
        raise UnexpectedFault(f"{operation} failed: {e}") from e


def ingest_logs_impl(*, text: str | None) -> dict[str, Any]:
    """Implementation for the `ingest_logs` MCP tool."""
    with _fault_boundary("Ingest"):
        incident = parse_incident(text or "")
        LOGGER.info(
            "Ingested %s lines for service=%s",
            incident.derived_signals["log_lines"],
            incident.service_guess,
        )
        return {"incident": IncidentModel.from_record(incident).to_wire()}


async def ingest_log_file_impl(*, path: str) -> dict[str, Any]:
    """Implementation for the `ingest_log_file` MCP tool."""
    if not path or not path.strip():
        raise InvalidInput("No path provided")
    with _fault_boundary("Ingest"):
        text = await read_text(path)
    LOGGER.debug("Read %s characters from %s", len(text), path)
    return ingest_logs_impl(text=text)


def analyze_payload_impl(payload: Mapping[str, Any] | None) -> dict[str, Any]:
    """Analyze a raw request body (``{scenario?, service?, region?, signals?, logs?}``)."""
    if payload is None:
        raise InvalidInput("No payload provided")
    if not isinstance(payload, Mapping):
        raise InvalidInput("Payload must be an object")

    try:
        request = AnalyzeRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidInput(f"Invalid analyze payload: {e.error_count()} error(s)") from e

    with _fault_boundary("Analyze"):
        output = analyze_incident(request.to_record())
        LOGGER.info(
            "Analyzed %s log lines: severity=%s confidence=%s",
            len(request.logs or ()),
            output.severity.value,
            output.confidence.value,
        )
        return {"output": AnalysisModel.from_record(output).to_wire()}


def analyze_incident_impl(
    *,
    scenario: str | None = None,
    service: str | None = None,
    region: str | None = None,
    signals: Mapping[str, Any] | None = None,
    logs: list[str] | None = None,
) -> dict[str, Any]:
    """Implementation for the `analyze_incident` MCP tool."""
    payload = {
        "scenario": scenario,
        "service": service,
        "region": region,
        "signals": dict(signals) if signals is not None else None,
        "logs": logs,
    }
    return analyze_payload_impl(payload)


def generate_brief_impl(*, text: str | None, scenario: str | None = None) -> dict[str, Any]:
    """Implementation for the `generate_brief` MCP tool.

    Runs ingest and analysis back to back and renders the Markdown brief and
    the executive summary from the same records.
    """
    with _fault_boundary("Brief"):
        incident = parse_incident(text or "")
        data = analysis_input_from_incident(incident, scenario=scenario)
        output = analyze_incident(data)

        markdown = render_markdown_brief(
            scenario=data.scenario,
            service=data.service,
            region=data.region,
            logs=data.logs,
            analysis=output,
        )
        summary = render_executive_summary(
            scenario=data.scenario,
            service=data.service,
            region=data.region,
            analysis=output,
        )
        return {
            "scenario": data.scenario,
            "incident": IncidentModel.from_record(incident).to_wire(),
            "output": AnalysisModel.from_record(output).to_wire(),
            "markdown": markdown,
            "executiveSummary": summary,
        }
