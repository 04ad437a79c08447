"""Helpers shared by API and service tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient

from vidhub.core.config import Settings

ACCESS_SECRET = "access-test-secret-key-32-bytes-minimum"
REFRESH_SECRET = "refresh-test-secret-key-32-bytes-minimum"
USERS = "/api/v1/users"


def make_settings(db_path: Path, **overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "vidhub_access_token_secret": ACCESS_SECRET,
        "vidhub_refresh_token_secret": REFRESH_SECRET,
        "vidhub_sqlite_path": str(db_path),
        # TestClient talks plain http; secure cookies would never be sent back.
        "vidhub_cookie_secure": False,
    }
    values.update(overrides)
    return Settings(**values)


def register(client: TestClient, payload: dict[str, str]) -> dict[str, Any]:
    response = client.post(f"{USERS}/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def login(client: TestClient, username: str = "alice", password: str = "correctPw") -> dict[str, Any]:
    response = client.post(f"{USERS}/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["data"]


def bearer(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}
