from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta

import pytest
from flask import Flask, jsonify, make_response, request
from werkzeug.http import parse_date

from authgate.application.services.tokens import TokenService
from authgate.interfaces.http.session import CACHE_CONTROL, SessionManager, current_user_id
from authgate.shared.config import SecurityConfig
from authgate.shared.errors import register_error_handler

from .helpers import TEST_SECRET


@pytest.fixture()
def sessions(token_service: TokenService) -> SessionManager:
    return SessionManager(tokens=token_service, config=SecurityConfig(COOKIE_NAME="token"))


@pytest.fixture()
def downstream_calls() -> list[int]:
    return []


@pytest.fixture()
def flask_app(
    sessions: SessionManager, token_service: TokenService, downstream_calls: list[int]
) -> Flask:
    app = Flask(__name__)
    register_error_handler(app)

    @app.post("/login/<int:user_id>")
    def login(user_id: int):
        response = make_response("", 204)
        sessions.attach(response, token_service.build_claims(user_id, "alice"))
        return response

    @app.get("/me")
    @sessions.require_authentication
    def me():
        downstream_calls.append(current_user_id())
        return jsonify({"user_id": current_user_id()})

    return app


def test_attach_sets_hardened_cookie(flask_app: Flask) -> None:
    before = datetime.now(UTC)
    with flask_app.test_client() as client:
        response = client.post("/login/42")
        cookie = client.get_cookie("token")

    header = response.headers["Set-Cookie"]
    assert header.startswith("token=")
    assert "Secure" in header
    assert "HttpOnly" in header
    assert "SameSite=Strict" in header
    assert "Path=/" in header

    assert cookie is not None
    assert cookie.value.count(".") == 2
    match = re.search(r"Expires=([^;]+)", header)
    assert match is not None
    expires = parse_date(match.group(1))
    expected = before + timedelta(hours=72)
    assert abs((expires - expected).total_seconds()) < 5


def test_middleware_binds_user_id(flask_app: Flask, downstream_calls: list[int]) -> None:
    with flask_app.test_client() as client:
        client.post("/login/42")
        response = client.get("/me")

    assert response.status_code == 200
    assert response.get_json() == {"user_id": 42}
    assert response.headers["Cache-Control"] == CACHE_CONTROL
    assert downstream_calls == [42]


def test_missing_cookie_short_circuits(flask_app: Flask, downstream_calls: list[int]) -> None:
    with flask_app.test_client() as client:
        response = client.get("/me")

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized"}
    assert downstream_calls == []


@pytest.mark.parametrize("value", ["garbage", "a.b.c", ""])
def test_invalid_cookie_short_circuits(
    flask_app: Flask, downstream_calls: list[int], value: str
) -> None:
    with flask_app.test_client() as client:
        client.set_cookie("token", value)
        response = client.get("/me")

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized"}
    assert downstream_calls == []


def test_expired_token_is_rejected_like_missing_one(
    flask_app: Flask, downstream_calls: list[int]
) -> None:
    stale = TokenService(
        TEST_SECRET,
        issuer="authgate",
        ttl=timedelta(hours=72),
        clock=lambda: datetime.now(UTC) - timedelta(days=4),
    ).issue(42, "alice")

    with flask_app.test_client() as client:
        client.set_cookie("token", stale)
        expired = client.get("/me")
    with flask_app.test_client() as client:
        missing = client.get("/me")

    assert expired.status_code == missing.status_code == 401
    assert expired.get_json() == missing.get_json()
    assert downstream_calls == []


def test_extract_reads_named_cookie(flask_app: Flask, sessions: SessionManager) -> None:
    with flask_app.test_request_context("/", headers={"Cookie": "token=abc; other=xyz"}):
        assert sessions.extract(request) == "abc"

    with flask_app.test_request_context("/", headers={"Cookie": "other=xyz"}):
        assert sessions.extract(request) is None


def test_clear_expires_cookie(flask_app: Flask, sessions: SessionManager) -> None:
    with flask_app.test_request_context("/"):
        response = make_response("", 204)
        sessions.clear(response)

    header = response.headers["Set-Cookie"]
    assert header.startswith("token=;")
    assert "Max-Age=0" in header
