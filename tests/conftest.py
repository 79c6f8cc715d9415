from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from mcp_incident_brief.core.source import BASE_DIR_ENV

AUTH_INCIDENT_TEXT = (
    '2026-01-06T13:01:02.114Z service="auth" region="eu10" ERROR upstream timeout\n'
    '2026-01-06T13:02:00.000Z service="auth" region="eu10" httpStatus=503 circuit breaker open'
)


@pytest.fixture
def auth_text() -> str:
    return AUTH_INCIDENT_TEXT


@pytest.fixture
def base_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv(BASE_DIR_ENV, str(tmp_path))
    return tmp_path


@pytest.fixture
def write_log() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text(
            "\n".join(
                [
                    '2026-01-06T13:01:02.114Z service="auth" region="eu10" ERROR upstream timeout',
                    '2026-01-06T13:01:30.501Z service="auth" region="eu10" WARN token_validation slow',
                    '2026-01-06T13:02:00.000Z service="auth" region="eu10" httpStatus=503 circuit breaker open',
                    '2026-01-06T13:02:41.870Z service="auth" region="eu10" INFO no scale event (max reached)',
                ]
            )
            + "\n",
            encoding="utf-8",
        )

    return _write
