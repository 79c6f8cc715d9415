"""Plain-text renderings of an incident brief (Markdown export, executive summary)."""

from __future__ import annotations

from collections.abc import Sequence

from .models import DEFAULT_SCENARIO, AnalysisInput, AnalysisOutput, ParsedIncident

BRIEF_TITLE = "SAP BTP Ops Copilot"


def scenario_label(incident: ParsedIncident, base: str = DEFAULT_SCENARIO) -> str:
    """Scenario name, suffixed with the time window when one was found."""
    window = incident.time_window
    if not window.start:
        return base
    return f"{base} ({window.start} -> {window.end or '-'})"


def analysis_input_from_incident(
    incident: ParsedIncident,
    scenario: str | None = None,
) -> AnalysisInput:
    """Build the analyzer payload from parser output."""
    return AnalysisInput(
        scenario=scenario or scenario_label(incident),
        service=incident.service_guess,
        region=incident.region_guess,
        signals=dict(incident.derived_signals),
        logs=incident.sample_lines,
    )


def _bullets(items: Sequence[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def render_markdown_brief(
    *,
    scenario: str,
    service: str,
    region: str,
    logs: Sequence[str],
    analysis: AnalysisOutput,
) -> str:
    """Render the exportable Markdown brief (Slack, Confluence, Jira, email)."""
    return "\n".join(
        [
            f"# Incident Brief: {BRIEF_TITLE}",
            "",
            f"**Scenario:** {scenario}",
            f"**Service:** {service}",
            f"**Region:** {region}",
            f"**Severity:** {analysis.severity.value}",
            f"**Confidence:** {analysis.confidence.value}",
            "",
            "## Executive One-liner",
            analysis.executive_one_liner,
            "",
            "## Signal Highlights",
            _bullets(analysis.signal_highlights),
            "",
            "## Summary",
            analysis.summary,
            "",
            "## Likely Root Cause",
            analysis.root_cause,
            "",
            "## Recommended Actions",
            _bullets(analysis.actions),
            "",
            "## Business Impact",
            analysis.business_impact,
            "",
            "## BTP-native Next Steps",
            _bullets(analysis.btp_next_steps),
            "",
            "## Recent Logs (sample)",
            "\n".join(f"- `{line}`" for line in logs),
            "",
            "_Generated from an uploaded log snippet._",
        ]
    )


def render_executive_summary(
    *,
    scenario: str,
    service: str,
    region: str,
    analysis: AnalysisOutput,
) -> str:
    return "\n".join(
        [
            f"{BRIEF_TITLE}: Executive Summary",
            f"Scenario: {scenario}",
            f"Service: {service} | Region: {region}",
            f"Severity: {analysis.severity.value} | Confidence: {analysis.confidence.value}",
            "",
            f"One-liner: {analysis.executive_one_liner}",
            f"Summary: {analysis.summary}",
            "",
            "Recommended Actions:",
            *(f"- {a}" for a in analysis.actions),
        ]
    )
