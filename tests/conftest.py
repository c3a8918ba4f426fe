"""Shared fixtures: isolated settings and a stubbed IOC service."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from core.config import AppSettings


@pytest.fixture()
def artifact_dir(tmp_path: Path) -> Path:
    path = tmp_path / "artifacts"
    path.mkdir()
    return path


@pytest.fixture()
def settings(artifact_dir: Path) -> AppSettings:
    """Settings that ignore any local/user .env file."""
    return AppSettings(
        _env_file=None,
        ioc_base_url="https://ioc.test",
        artifact_dir=artifact_dir,
        http_timeout_seconds=5.0,
    )


def ioc_body(*classifications: str | None) -> str:
    """Build a search response with one record per classification."""
    records = []
    for value in classifications:
        records.append({} if value is None else {"classification": value, "ioc": "example"})
    return json.dumps({"data": records, "success": True})


def static_transport(body: str, status_code: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=body)

    return httpx.MockTransport(handler)
