from __future__ import annotations

import json
from pathlib import Path

import pytest

from mcp_incident_brief.cli import main


def test_cli_brief_summary(base_dir: Path, write_log, capsys) -> None:
    path = base_dir / "app.log"
    write_log(path)

    main(["brief", str(path), "--format", "summary", "--scenario", "Login outage"])

    out = capsys.readouterr().out
    assert "Scenario: Login outage" in out
    assert "Service: auth | Region: eu10" in out


def test_cli_ingest_json(base_dir: Path, write_log, capsys) -> None:
    path = base_dir / "app.log"
    write_log(path)

    main(["ingest", str(path)])

    payload = json.loads(capsys.readouterr().out)
    assert payload["incident"]["derivedSignals"]["log_lines"] == 4


def test_cli_analyze_payload(base_dir: Path, capsys) -> None:
    path = base_dir / "payload.json"
    path.write_text(json.dumps({"signals": {"errors": 1}, "logs": ["a", "b", "c"]}), encoding="utf-8")

    main(["analyze", str(path)])

    payload = json.loads(capsys.readouterr().out)
    assert payload["output"]["severity"] == "Medium"


def test_cli_empty_input_exits_2(base_dir: Path, capsys) -> None:
    path = base_dir / "empty.log"
    path.write_text("\n\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["ingest", str(path)])

    assert exc.value.code == 2
    assert "No text provided" in capsys.readouterr().err


def test_cli_missing_file_exits_2(base_dir: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["brief", str(base_dir / "missing.log")])
    assert exc.value.code == 2
