"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def incident_brief(log_path: str | None = None, scenario: str | None = None) -> list[dict[str, Any]]:
        """Build a prompt that walks through ingest -> analyze -> brief."""
        if log_path:
            ingest_step = f"- Call ingest_log_file with path: {log_path}\n"
        else:
            ingest_step = "- Call ingest_logs with the log text the user pasted.\n"
        scenario_line = f"- scenario: {scenario}\n" if scenario else ""
        return [
            {
                "role": "system",
                "content": (
                    "You are an incident communications assistant. Severity, confidence and "
                    "root cause come from the analyze_incident tool; do not change them or "
                    "invent evidence."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Draft an incident brief. Follow this workflow:\n"
                    f"{ingest_step}"
                    "- Pass serviceGuess, regionGuess, derivedSignals and sampleLines to "
                    "analyze_incident (as service, region, signals, logs).\n"
                    f"{scenario_line}"
                    "- If ingest fails with 'No text provided', ask the user for log text.\n\n"
                    "Return this structure:\n"
                    "1) Severity and confidence\n"
                    "2) Executive one-liner\n"
                    "3) Likely root cause\n"
                    "4) Top patterns with counts\n"
                    "5) Recommended actions\n"
                ),
            },
        ]
