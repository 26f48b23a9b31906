from __future__ import annotations

from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from chatapp.application.use_cases.users.login_user import LoginUserUseCase
from chatapp.application.use_cases.users.register_user import RegisterUserUseCase
from chatapp.domain.users.entities import User
from chatapp.domain.users.exceptions import InvalidCredentialsError
from chatapp.interfaces.http.controllers.auth_controller import AuthController
from chatapp.shared.middleware.error_handler import configure_error_handling
from chatapp.tests.fakes import NOW


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def test_register_endpoint_returns_token(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str, str | None]] = {}

    class StubRegister:
        def execute(
            self, username: str, password: str, display_name: str | None = None
        ) -> tuple[User, str]:
            register_called["args"] = (username, password, display_name)
            return (
                User(
                    id=1,
                    username=username,
                    password_hash="hash",
                    display_name=display_name or username,
                    created_at=NOW,
                ),
                "token123",
            )

    controller = AuthController(
        register_use_case=cast(RegisterUserUseCase, StubRegister()),
        login_use_case=MagicMock(),
        token_ttl_seconds=3600,
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/auth/register", json={"username": "alice", "password": "secret123"}
        )

    assert response.status_code == 201
    assert register_called["args"] == ("alice", "secret123", None)
    payload = response.get_json()
    assert payload["token"] == "token123"
    assert payload["token_type"] == "Bearer"
    assert payload["expires_in"] == 3600
    assert payload["user"]["username"] == "alice"
    assert "password_hash" not in payload["user"]


def test_register_invalid_payload_returns_422(flask_app: Flask) -> None:
    register = MagicMock()
    controller = AuthController(
        register_use_case=register,
        login_use_case=MagicMock(),
        token_ttl_seconds=3600,
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/register", json={"username": "1a", "password": "x"})

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["context"]["fields"] == ["password", "username"]
    register.execute.assert_not_called()


def test_login_invalid_credentials_returns_401(flask_app: Flask) -> None:
    login = MagicMock(spec=LoginUserUseCase)
    login.execute.side_effect = InvalidCredentialsError()
    controller = AuthController(
        register_use_case=MagicMock(),
        login_use_case=login,
        token_ttl_seconds=3600,
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/auth/login", json={"username": "alice", "password": "bad"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid_credentials"}
