"""Incident brief MCP server: parse pasted log text and draft a rule-based incident brief."""

__version__ = "0.1.0"
