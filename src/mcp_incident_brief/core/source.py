"""Reading uploaded log files as text.

Files are treated as UTF-8 regardless of extension; ``.gz`` files are
decompressed transparently. Paths are confined to a base directory.
"""

from __future__ import annotations

import gzip
import os
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .errors import InvalidInput

BASE_DIR_ENV = "INCIDENT_BRIEF_BASE_DIR"
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "replace"


def base_dir() -> Path:
    """Return the resolved base directory for file ingestion."""
    raw = os.getenv(BASE_DIR_ENV) or os.getcwd()
    return Path(raw).resolve()


def safe_resolve(path: str | Path, *, base: Path | None = None) -> Path:
    """Resolve a path under the base directory, rejecting escapes."""
    root = base if base is not None else base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = root / p
    p = p.resolve()
    if root not in p.parents and p != root:
        raise InvalidInput(f"Path escapes base dir: {path}")
    return p


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


async def read_text(
    path: str | Path,
    *,
    base: Path | None = None,
    encoding: str = TEXT_ENCODING,
    decode_errors: str = TEXT_ERRORS,
) -> str:
    """Read a whole log file as text.

    Raises
    ------
    InvalidInput
        When the path escapes the base directory.
    FileNotFoundError
        When the resolved path is not a file.
    """
    p = safe_resolve(path, base=base)
    if not p.is_file():
        raise FileNotFoundError(f"Log file not found: {p}")

    async with _open_text(p, encoding=encoding, decode_errors=decode_errors) as f:
        return await f.read()
