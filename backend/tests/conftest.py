"""Shared fixtures for vidhub tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from tests.helpers import make_settings
from tests.helpers import register
from vidhub import runtime
from vidhub.core.config import Settings
from vidhub.core.tokens import TokenCodec


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path / "vidhub.sqlite3")


@pytest.fixture
def started(settings: Settings) -> Settings:
    """Settings with schema initialised, for service-level tests."""
    runtime.startup(settings)
    return settings


@pytest.fixture
def codec(started: Settings) -> TokenCodec:
    return TokenCodec.from_settings(started)


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    from vidhub.main import create_app

    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def register_payload() -> dict[str, str]:
    """Default register payload used by API tests."""
    return {
        "username": "Alice",
        "email": "alice@example.com",
        "fullname": "Alice Liddell",
        "password": "correctPw",
    }


@pytest.fixture
def alice(client: TestClient, register_payload: dict[str, str]) -> dict[str, Any]:
    """Registered user ``alice``; returns the public user view."""
    return register(client, register_payload)
