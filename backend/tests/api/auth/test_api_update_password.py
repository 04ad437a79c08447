"""POST /update-password contract tests."""

from __future__ import annotations

from typing import Any

from fastapi.testclient import TestClient

from tests.helpers import USERS
from tests.helpers import login


def test_update_password_then_login_with_new_password(client: TestClient, alice: dict[str, Any]) -> None:
    login(client)

    response = client.post(
        f"{USERS}/update-password",
        json={"oldPassword": "correctPw", "newPassword": "newPw"},
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Password changed Successfully"
    old = client.post(f"{USERS}/login", json={"username": "alice", "password": "correctPw"})
    assert old.status_code == 400
    login(client, password="newPw")


def test_update_password_rejects_wrong_old_password(client: TestClient, alice: dict[str, Any]) -> None:
    login(client)

    response = client.post(
        f"{USERS}/update-password",
        json={"oldPassword": "wrong", "newPassword": "newPw"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid old password"


def test_update_password_keeps_refresh_token_valid(client: TestClient, alice: dict[str, Any]) -> None:
    refresh = login(client)["refreshToken"]
    client.post(f"{USERS}/update-password", json={"oldPassword": "correctPw", "newPassword": "newPw"})
    client.cookies.clear()

    response = client.post(f"{USERS}/refresh-token", json={"refreshToken": refresh})

    assert response.status_code == 200


def test_update_password_requires_access_token(client: TestClient) -> None:
    response = client.post(
        f"{USERS}/update-password",
        json={"oldPassword": "correctPw", "newPassword": "newPw"},
    )
    assert response.status_code == 401
