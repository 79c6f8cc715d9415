from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence
from typing import Any

from mcp_incident_brief.core.errors import IncidentBriefError
from mcp_incident_brief.core.source import read_text
from mcp_incident_brief.tools.incident import (
    analyze_payload_impl,
    generate_brief_impl,
    ingest_logs_impl,
)


def _read_input(path: str) -> str:
    """Read a file, or stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    return asyncio.run(read_text(path))


def _dump(obj: Any) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="incident-brief",
        description="Rule-based incident brief from pasted or uploaded log text.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="Parse log text and print the incident signals")
    ingest.add_argument("log_path", help="Log file path, or '-' for stdin")

    analyze = sub.add_parser("analyze", help="Analyze a JSON payload (scenario/service/region/signals/logs)")
    analyze.add_argument("payload_path", help="JSON file path, or '-' for stdin")

    brief = sub.add_parser("brief", help="Ingest + analyze and print the brief")
    brief.add_argument("log_path", help="Log file path, or '-' for stdin")
    brief.add_argument("--scenario", default=None, help="Scenario label (default: derived from the time window)")
    brief.add_argument(
        "--format",
        dest="fmt",
        choices=["markdown", "summary", "json"],
        default="markdown",
        help="Output format (default: markdown)",
    )
    return p


def run(args: argparse.Namespace) -> str:
    if args.command == "ingest":
        return _dump(ingest_logs_impl(text=_read_input(args.log_path)))

    if args.command == "analyze":
        raw = _read_input(args.payload_path)
        try:
            payload = json.loads(raw) if raw.strip() else None
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        return _dump(analyze_payload_impl(payload))

    result = generate_brief_impl(text=_read_input(args.log_path), scenario=args.scenario)
    if args.fmt == "summary":
        return result["executiveSummary"]
    if args.fmt == "json":
        return _dump(result)
    return result["markdown"]


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entrypoint for local use without an MCP client."""
    args = build_parser().parse_args(argv)
    try:
        out = run(args)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (IncidentBriefError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    print(out)


if __name__ == "__main__":
    main()
