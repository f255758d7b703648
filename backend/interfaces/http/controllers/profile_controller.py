# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP controller for the signed-in user's profile."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from backend.application.use_cases.users.change_nickname import ChangeNicknameUseCase
from backend.application.use_cases.users.get_profile import GetProfileUseCase
from backend.application.use_cases.users.update_profile_icon import UpdateProfileIconUseCase
from backend.auth import auth_required, current_user_id
from backend.interfaces.http.dto.users import (IconResponseDTO, MessageDTO, NicknameRequestDTO,
                                               ProfileDTO, ProfileResponseDTO)
from backend.shared.errors.base import ValidationError as RequestValidationError
from backend.shared.errors.validation import raise_validation_error
from backend.shared.logging import logger


class ProfileController:
    def __init__(
        self,
        *,
        get_profile_use_case: GetProfileUseCase,
        change_nickname_use_case: ChangeNicknameUseCase,
        update_icon_use_case: UpdateProfileIconUseCase,
        max_upload_bytes: int,
    ) -> None:
        self._get_profile = get_profile_use_case
        self._change_nickname = change_nickname_use_case
        self._update_icon = update_icon_use_case
        self._max_upload_bytes = max_upload_bytes

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("profile", __name__, url_prefix="/api/me")
        bp.add_url_rule("", view_func=self.me, methods=["GET"], endpoint="me_info")
        bp.add_url_rule(
            "/nickname", view_func=self.change_nickname, methods=["PUT"], endpoint="me_nickname"
        )
        bp.add_url_rule("/icon", view_func=self.update_icon, methods=["PUT"], endpoint="me_icon")
        return bp

    @auth_required
    def me(self) -> tuple[Response, int]:
        account = self._get_profile.execute(current_user_id())
        payload = ProfileResponseDTO(
            data=ProfileDTO(nickname=account.nickname, icon=account.profile_icon, tag=account.tag)
        )
        return jsonify(payload.model_dump()), 200

    @auth_required
    def change_nickname(self) -> tuple[Response, int]:
        try:
            dto = NicknameRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        self._change_nickname.execute(current_user_id(), dto.nickname)
        return jsonify(MessageDTO(message="Nickname changed").model_dump()), 200

    @auth_required
    def update_icon(self) -> tuple[Response, int]:
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise RequestValidationError("file is required", context={"fields": ["file"]})

        content = upload.read(self._max_upload_bytes + 1)
        if not content:
            raise RequestValidationError("file is empty", context={"fields": ["file"]})
        if len(content) > self._max_upload_bytes:
            raise RequestValidationError(
                "file is too large", context={"max_bytes": self._max_upload_bytes}
            )

        user_id = current_user_id()
        url = self._update_icon.execute(
            user_id, content, filename=upload.filename, content_type=upload.mimetype
        )
        logger.info(f"profile.icon: ok user_id={user_id}")
        payload = IconResponseDTO(message="Profile icon updated", profile_icon=url)
        return jsonify(payload.model_dump(by_alias=True)), 200
