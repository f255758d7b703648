# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from backend.application.use_cases.users.login_user import LoginUserUseCase
from backend.application.use_cases.users.register_user import RegisterUserUseCase
from backend.interfaces.http.dto.users import (LoginRequestDTO, LoginResponseDTO,
                                               RegisteredUserDTO, RegisterRequestDTO,
                                               RegisterResponseDTO)
from backend.shared.errors.validation import raise_validation_error
from backend.shared.logging import logger
from backend.shared.middleware.rate_limit import rate_limit


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    @rate_limit(limit=5, window_seconds=60.0)
    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        account = self._register_use_case.execute(dto.username, dto.password, dto.nickname)

        payload = RegisterResponseDTO(
            message="Registration successful",
            data=RegisteredUserDTO(
                username=account.username, nickname=account.nickname, tag=account.tag
            ),
        )
        logger.info(f"auth.register: ok user_id={account.id}")
        return jsonify(payload.model_dump()), 201

    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        token = self._login_use_case.execute(dto.username, dto.password)

        payload = LoginResponseDTO(message="Login successful", token=token)
        logger.info(f"auth.login: ok username={dto.username}")
        return jsonify(payload.model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
