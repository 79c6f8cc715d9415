from __future__ import annotations

from mcp_incident_brief.core.parser import parse_incident
from mcp_incident_brief.resources.registry import SAMPLE_LOG, pattern_rules, severity_table


def test_pattern_rules_lists_every_tag() -> None:
    rules = pattern_rules()
    assert rules["levels"] == {"errors": " ERROR ", "warns": " WARN ", "infos": " INFO "}
    assert rules["timeout"] == "TIMEOUT"
    assert rules["patterns"]["autoscaler_max_reached"] == ["NO SCALE EVENT", "MAX REACHED"]
    assert len(rules["patterns"]) == 5


def test_severity_table_has_three_tiers() -> None:
    table = severity_table()
    assert list(table["narratives"]) == ["High", "Medium", "Low"]
    assert "upstream timeout" in table["rootCause"]


def test_sample_log_parses() -> None:
    incident = parse_incident(SAMPLE_LOG)
    assert incident.service_guess == "auth"
    assert incident.derived_signals["log_lines"] == 4
    assert len(incident.top_patterns) == 4
