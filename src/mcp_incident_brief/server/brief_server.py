"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: ingest log text, analyze signals, generate a full brief
- Resources: rule tables, sample log and payload schemas
- Prompts: the incident brief workflow

Run locally (stdio):
    python -m mcp_incident_brief.server.brief_server
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_incident_brief.prompts.registry import register_prompts
from mcp_incident_brief.resources.registry import register_resources
from mcp_incident_brief.tools.incident import (
    analyze_incident_impl,
    generate_brief_impl,
    ingest_log_file_impl,
    ingest_logs_impl,
)

LOGGER = logging.getLogger(__name__)

LOG_LEVEL_ENV = "INCIDENT_BRIEF_LOG_LEVEL"


def _configure_logging() -> None:
    """Configure logging on stderr; stdout belongs to the stdio transport."""
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("incident-brief", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
def ingest_logs(text: str) -> dict[str, Any]:
    """Parse pasted log text into incident signals.

    Parameters
    ----------
    text:
        Raw log text, one record per line. RTF documents are unwrapped first.

    Returns
    -------
    dict:
        {"incident": {serviceGuess, regionGuess, timeWindow, topPatterns,
        sampleLines, derivedSignals}}
    """
    return ingest_logs_impl(text=text)


@mcp.tool()
async def ingest_log_file(path: str) -> dict[str, Any]:
    """Parse a log file (read as UTF-8, optionally .gz) under INCIDENT_BRIEF_BASE_DIR."""
    return await ingest_log_file_impl(path=path)


@mcp.tool()
def analyze_incident(
    scenario: str | None = None,
    service: str | None = None,
    region: str | None = None,
    signals: dict[str, Any] | None = None,
    logs: list[str] | None = None,
) -> dict[str, Any]:
    """Map derived signals and sample logs to a rule-based incident brief.

    Parameters
    ----------
    scenario/service/region:
        Labels carried from ingest (defaults: "Uploaded Incident",
        "BTP Service (unknown)", "unknown").
    signals:
        Derived signals from ingest_logs (errors, warns, timeouts, http_5xx,
        error_rate_pct, log_lines). Numeric strings are accepted.
    logs:
        Sample log lines (required, non-empty).

    Returns
    -------
    dict:
        {"output": {severity, confidence, summary, rootCause, actions,
        businessImpact, btpNextSteps, signalHighlights, executiveOneLiner}}
    """
    return analyze_incident_impl(
        scenario=scenario,
        service=service,
        region=region,
        signals=signals,
        logs=logs,
    )


@mcp.tool()
def generate_brief(text: str, scenario: str | None = None) -> dict[str, Any]:
    """Ingest + analyze in one call and render the Markdown brief."""
    return generate_brief_impl(text=text, scenario=scenario)


def main() -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
