from __future__ import annotations

import io
from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from backend.application.services.tokens import JwtTokenService
from backend.application.use_cases.users.login_user import LoginUserUseCase
from backend.application.use_cases.users.register_user import RegisterUserUseCase
from backend.auth import install_token_service
from backend.domain.users.entities import Account
from backend.domain.users.exceptions import DuplicateUsernameError, InvalidCredentialsError
from backend.interfaces.http.controllers.auth_controller import AuthController
from backend.interfaces.http.controllers.profile_controller import ProfileController
from backend.shared.middleware.error_handler import configure_error_handling

TOKENS = JwtTokenService("secret", ttl=timedelta(hours=1))


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    install_token_service(app, TOKENS)
    return app


def _account(**overrides) -> Account:
    fields = {
        "id": 1,
        "username": "abc",
        "nickname": "Ann",
        "password_hash": "hash",
        "tag_number": 1,
        "created_at": datetime.now(UTC),
    }
    fields.update(overrides)
    return Account(**fields)


def _auth_controller(register=None, login=None) -> AuthController:
    return AuthController(
        register_use_case=cast(RegisterUserUseCase, register or MagicMock()),
        login_use_case=cast(LoginUserUseCase, login or MagicMock()),
    )


def test_register_endpoint_returns_tag(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str, str]] = {}

    class StubRegister:
        def execute(self, username: str, password: str, nickname: str) -> Account:
            register_called["args"] = (username, password, nickname)
            return _account(username=username, nickname=nickname, tag_number=2)

    flask_app.register_blueprint(_auth_controller(register=StubRegister()).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register", json={"username": " xyz ", "password": "123", "nickname": "Bob"}
        )

    assert response.status_code == 201
    assert register_called["args"] == ("xyz", "123", "Bob")
    assert response.get_json() == {
        "success": True,
        "message": "Registration successful",
        "data": {"username": "xyz", "nickname": "Bob", "tag": "#02"},
    }


def test_register_missing_field_returns_400(flask_app: Flask) -> None:
    register = MagicMock()
    flask_app.register_blueprint(_auth_controller(register=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/register", json={"username": "abc", "password": "123"})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"] == "validation_error"
    assert payload["message"] == "nickname is required"
    register.execute.assert_not_called()


def test_register_password_over_72_bytes_is_rejected(flask_app: Flask) -> None:
    flask_app.register_blueprint(_auth_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register", json={"username": "abc", "password": "x" * 73, "nickname": "Ann"}
        )

    assert response.status_code == 400
    assert response.get_json()["message"] == "password is invalid"


def test_register_duplicate_maps_to_400(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = DuplicateUsernameError()
    flask_app.register_blueprint(_auth_controller(register=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register", json={"username": "abc", "password": "123", "nickname": "Ann"}
        )

    assert response.status_code == 400
    assert response.get_json()["error"] == "duplicate_username"


def test_login_invalid_payload_returns_400(flask_app: Flask) -> None:
    flask_app.register_blueprint(_auth_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"username": "a"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "password is required"


def test_login_returns_token(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = "token123"
    flask_app.register_blueprint(_auth_controller(login=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"username": "abc", "password": "123"})

    assert response.status_code == 200
    assert response.get_json()["token"] == "token123"
    login.execute.assert_called_once_with("abc", "123")


def test_login_wrong_password_returns_401(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    flask_app.register_blueprint(_auth_controller(login=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"username": "abc", "password": "bad"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_credentials"


def _profile_controller(get_profile=None) -> ProfileController:
    return ProfileController(
        get_profile_use_case=get_profile or MagicMock(),
        change_nickname_use_case=MagicMock(),
        update_icon_use_case=MagicMock(),
        max_upload_bytes=16,
    )


@pytest.mark.parametrize(
    ("headers", "error"),
    [
        ({}, "token_missing"),
        ({"Authorization": "Basic abc"}, "token_missing"),
        ({"Authorization": "Bearer garbage"}, "token_invalid"),
    ],
)
def test_me_requires_valid_token(flask_app: Flask, headers, error) -> None:
    get_profile = MagicMock()
    flask_app.register_blueprint(_profile_controller(get_profile).as_blueprint())

    with flask_app.test_client() as client:
        response = client.get("/api/me", headers=headers)

    assert response.status_code == 401
    assert response.get_json()["error"] == error
    get_profile.execute.assert_not_called()


def test_me_returns_profile_for_token_subject(flask_app: Flask) -> None:
    get_profile = MagicMock()
    get_profile.execute.return_value = _account(id=5, tag_number=12, profile_icon="/media/i.png")
    flask_app.register_blueprint(_profile_controller(get_profile).as_blueprint())
    token = TOKENS.issue(5, "abc")

    with flask_app.test_client() as client:
        response = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.get_json()["data"] == {"nickname": "Ann", "icon": "/media/i.png", "tag": "#12"}
    get_profile.execute.assert_called_once_with(5)


def test_icon_upload_rejects_oversized_file(flask_app: Flask) -> None:
    controller = _profile_controller()
    flask_app.register_blueprint(controller.as_blueprint())
    token = TOKENS.issue(5, "abc")

    with flask_app.test_client() as client:
        response = client.put(
            "/api/me/icon",
            headers={"Authorization": f"Bearer {token}"},
            data={"file": (io.BytesIO(b"x" * 17), "big.png")},
            content_type="multipart/form-data",
        )

    assert response.status_code == 400
    assert response.get_json()["message"] == "file is too large"


def test_icon_upload_requires_file(flask_app: Flask) -> None:
    flask_app.register_blueprint(_profile_controller().as_blueprint())
    token = TOKENS.issue(5, "abc")

    with flask_app.test_client() as client:
        response = client.put(
            "/api/me/icon",
            headers={"Authorization": f"Bearer {token}"},
            data={},
            content_type="multipart/form-data",
        )

    assert response.status_code == 400
    assert response.get_json()["message"] == "file is required"

def test_login_password_over_request_limit_is_rejected(flask_app: Flask) -> None:
    login = MagicMock()
    flask_app.register_blueprint(_auth_controller(login=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"username": "abc", "password": "x" * 1025})

    assert response.status_code == 400
    assert response.get_json()["message"] == "password is invalid"
    login.execute.assert_not_called()


def test_non_string_field_is_reported_invalid(flask_app: Flask) -> None:
    flask_app.register_blueprint(_auth_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register", json={"username": 5, "password": "123", "nickname": "Ann"}
        )

    assert response.status_code == 400
    assert response.get_json()["message"] == "username is invalid"
