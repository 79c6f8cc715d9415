"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_incident_brief.core.patterns import default_scan_config
from mcp_incident_brief.core.rules import NARRATIVES, ROOT_CAUSE_RULES
from mcp_incident_brief.core.source import BASE_DIR_ENV, base_dir, read_text
from mcp_incident_brief.tools.schemas import AnalysisModel, AnalyzeRequest, IncidentModel

SAMPLE_LOG = (
    '2026-01-06T13:01:02.114Z service="auth" region="eu10" ERROR upstream timeout\n'
    '2026-01-06T13:01:30.501Z service="auth" region="eu10" WARN token_validation slow p95=2300ms\n'
    '2026-01-06T13:02:00.000Z service="auth" region="eu10" httpStatus=503 circuit breaker open\n'
    '2026-01-06T13:02:41.870Z service="auth" region="eu10" INFO autoscaler no scale event (max reached)\n'
)


def pattern_rules() -> dict[str, Any]:
    """Return the classification tokens and pattern heuristics as plain data."""
    cfg = default_scan_config()
    return {
        "levels": {counter: token for counter, token in cfg.levels},
        "timeout": cfg.timeout_token,
        "patterns": {rule.tag: list(rule.tokens) for rule in cfg.patterns},
    }


def severity_table() -> dict[str, Any]:
    """Return the narrative lookup table and root-cause clauses."""
    return {
        "narratives": {
            sev.value: {
                "summary": n.summary,
                "businessImpact": n.business_impact,
                "executiveOneLiner": n.executive_one_liner,
            }
            for sev, n in NARRATIVES.items()
        },
        "rootCause": {r.needle: r.clause for r in ROOT_CAUSE_RULES},
    }


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://incident-brief/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://incident-brief/help\n"
            "- app://incident-brief/examples/sample-log\n"
            "- app://incident-brief/config/pattern-rules\n"
            "- app://incident-brief/config/severity-table\n"
            "- app://incident-brief/schemas/incident\n"
            "- app://incident-brief/schemas/analyze-request\n"
            "- app://incident-brief/schemas/analysis\n"
            f"- log://{{path}} (restricted to {BASE_DIR_ENV})\n"
            f"\nBase directory: {base_dir()}\n"
        )

    @mcp.resource("app://incident-brief/examples/sample-log")
    def sample_log() -> str:
        """Return a tiny sample log for demos and tests."""
        return SAMPLE_LOG

    @mcp.resource("app://incident-brief/config/pattern-rules")
    def pattern_rules_resource() -> dict[str, Any]:
        return pattern_rules()

    @mcp.resource("app://incident-brief/config/severity-table")
    def severity_table_resource() -> dict[str, Any]:
        return severity_table()

    @mcp.resource("app://incident-brief/schemas/incident")
    def incident_schema() -> dict[str, Any]:
        return IncidentModel.model_json_schema(by_alias=True)

    @mcp.resource("app://incident-brief/schemas/analyze-request")
    def analyze_request_schema() -> dict[str, Any]:
        return AnalyzeRequest.model_json_schema(by_alias=True)

    @mcp.resource("app://incident-brief/schemas/analysis")
    def analysis_schema() -> dict[str, Any]:
        return AnalysisModel.model_json_schema(by_alias=True)

    @mcp.resource("log://{path}")
    async def read_log(path: str) -> str:
        """Return the full log contents from within INCIDENT_BRIEF_BASE_DIR."""
        return await read_text(path)
