from __future__ import annotations

import gzip
from pathlib import Path

import pytest

from mcp_incident_brief.core.errors import InvalidInput
from mcp_incident_brief.core.source import read_text, safe_resolve


@pytest.mark.asyncio
async def test_read_text_plain(base_dir: Path, write_log) -> None:
    path = base_dir / "app.log"
    write_log(path)

    text = await read_text(path)
    assert text.count("\n") == 4
    assert 'service="auth"' in text


@pytest.mark.asyncio
async def test_read_text_relative_to_base(base_dir: Path) -> None:
    (base_dir / "notes.md").write_text("x ERROR y\n", encoding="utf-8")
    assert await read_text("notes.md") == "x ERROR y\n"


@pytest.mark.asyncio
async def test_read_text_gzip(base_dir: Path) -> None:
    path = base_dir / "app.log.gz"
    with gzip.open(path, mode="wt", encoding="utf-8") as f:
        f.write("x WARN y\n")

    assert await read_text(path) == "x WARN y\n"


@pytest.mark.asyncio
async def test_read_text_replaces_invalid_utf8(base_dir: Path) -> None:
    path = base_dir / "upload.bin"
    path.write_bytes(b"ok \xff line\n")

    text = await read_text(path)
    assert text.startswith("ok ")
    assert "�" in text


@pytest.mark.asyncio
async def test_read_text_missing_file(base_dir: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await read_text(base_dir / "missing.log")


def test_safe_resolve_rejects_escape(tmp_path: Path) -> None:
    base = tmp_path / "root"
    base.mkdir()
    with pytest.raises(InvalidInput):
        safe_resolve("../outside.log", base=base.resolve())
