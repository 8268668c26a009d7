from __future__ import annotations

from datetime import timedelta

import pytest
from flask import Flask, g, jsonify

from imagestudio.domain.users.exceptions import (InvalidTokenError, InvalidTokenFormatError,
                                                 MissingTokenError)
from imagestudio.domain.users.repositories import TokenService
from imagestudio.shared.middleware.session_guard import SessionGuard


class FakeTokenService(TokenService):
    def issue(self, user_id: int, ttl: timedelta) -> str:
        return f"token-{user_id}-1"

    def verify(self, token: str) -> int:
        parts = token.split("-")
        if len(parts) != 3 or parts[0] != "token":
            raise InvalidTokenError()
        return int(parts[1])


@pytest.fixture()
def guard() -> SessionGuard:
    return SessionGuard(FakeTokenService())


@pytest.fixture()
def guarded_app(guard: SessionGuard) -> Flask:
    app = Flask(__name__)
    calls: list[int] = []
    app.config["calls"] = calls

    @app.get("/private")
    @guard.required
    def private():
        calls.append(g.user_id)
        return jsonify({"user_id": g.user_id})

    return app


def test_authenticate_without_header(guard: SessionGuard) -> None:
    with pytest.raises(MissingTokenError):
        guard.authenticate(None)


@pytest.mark.parametrize("header", ["token-1-1", "Basic abc", "Bearer", "Bearer   "])
def test_authenticate_rejects_non_bearer(guard: SessionGuard, header: str) -> None:
    with pytest.raises(InvalidTokenFormatError):
        guard.authenticate(header)


def test_authenticate_rejects_bad_token(guard: SessionGuard) -> None:
    with pytest.raises(InvalidTokenError):
        guard.authenticate("Bearer nonsense")


def test_authenticate_returns_user_id(guard: SessionGuard) -> None:
    assert guard.authenticate("Bearer token-3-1") == 3


@pytest.mark.parametrize(
    ("headers", "error"),
    [
        ({}, "missing_token"),
        ({"Authorization": "Token token-3-1"}, "invalid_token_format"),
        ({"Authorization": "Bearer garbage"}, "invalid_token"),
    ],
)
def test_required_answers_401_without_calling_view(
    guarded_app: Flask, headers: dict[str, str], error: str
) -> None:
    with guarded_app.test_client() as client:
        response = client.get("/private", headers=headers)

    assert response.status_code == 401
    assert response.get_json() == {"error": error}
    assert guarded_app.config["calls"] == []


def test_required_attaches_user_id(guarded_app: Flask) -> None:
    with guarded_app.test_client() as client:
        response = client.get("/private", headers={"Authorization": "Bearer token-3-1"})

    assert response.status_code == 200
    assert response.get_json() == {"user_id": 3}
    assert guarded_app.config["calls"] == [3]
