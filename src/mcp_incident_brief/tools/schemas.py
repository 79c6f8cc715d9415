"""Wire models for tool payloads.

Core records stay plain dataclasses; these pydantic models give them the
camelCase shape of the external contract and publish JSON schemas.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mcp_incident_brief.core.models import (
    AnalysisInput,
    AnalysisOutput,
    Confidence,
    DEFAULT_SCENARIO,
    ParsedIncident,
    Severity,
    UNKNOWN_REGION,
    UNKNOWN_SERVICE,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TimeWindowModel(_WireModel):
    start: str | None = Field(default=None, description="First timestamp seen (document order).")
    end: str | None = Field(default=None, description="Last timestamp seen (document order).")


class PatternCountModel(_WireModel):
    pattern: str = Field(description="Pattern tag, e.g. upstream_timeout.")
    count: int = Field(ge=1, description="Number of lines matching the tag.")


class IncidentModel(_WireModel):
    service_guess: str = Field(description="Most frequent service= value, or a sentinel.")
    region_guess: str = Field(description="Most frequent region= value, or 'unknown'.")
    time_window: TimeWindowModel
    top_patterns: list[PatternCountModel] = Field(max_length=6)
    sample_lines: list[str] = Field(max_length=10)
    derived_signals: dict[str, int | float | str]

    @classmethod
    def from_record(cls, incident: ParsedIncident) -> IncidentModel:
        return cls(
            service_guess=incident.service_guess,
            region_guess=incident.region_guess,
            time_window=TimeWindowModel(
                start=incident.time_window.start,
                end=incident.time_window.end,
            ),
            top_patterns=[
                PatternCountModel(pattern=p.pattern, count=p.count) for p in incident.top_patterns
            ],
            sample_lines=list(incident.sample_lines),
            derived_signals=dict(incident.derived_signals),
        )


class AnalyzeRequest(_WireModel):
    scenario: str | None = None
    service: str | None = None
    region: str | None = None
    signals: dict[str, Any] | None = Field(
        default=None, description="Derived signals; numbers or numeric strings."
    )
    logs: list[str] | None = Field(default=None, description="Sample log lines.")

    def to_record(self) -> AnalysisInput:
        return AnalysisInput(
            scenario=self.scenario if self.scenario is not None else DEFAULT_SCENARIO,
            service=self.service if self.service is not None else UNKNOWN_SERVICE,
            region=self.region if self.region is not None else UNKNOWN_REGION,
            signals=dict(self.signals or {}),
            logs=tuple(self.logs or ()),
        )


class AnalysisModel(_WireModel):
    severity: Severity
    confidence: Confidence
    summary: str
    root_cause: str
    actions: list[str]
    business_impact: str
    btp_next_steps: list[str]
    signal_highlights: list[str]
    executive_one_liner: str

    @classmethod
    def from_record(cls, out: AnalysisOutput) -> AnalysisModel:
        return cls(
            severity=out.severity,
            confidence=out.confidence,
            summary=out.summary,
            root_cause=out.root_cause,
            actions=list(out.actions),
            business_impact=out.business_impact,
            btp_next_steps=list(out.btp_next_steps),
            signal_highlights=list(out.signal_highlights),
            executive_one_liner=out.executive_one_liner,
        )
