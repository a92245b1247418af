# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, make_response, request
from pydantic import ValidationError

from authgate.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from authgate.application.use_cases.users.login_user import LoginUserUseCase
from authgate.application.use_cases.users.register_user import RegisterUserUseCase
from authgate.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    CurrentUserDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
)
from authgate.interfaces.http.session import SessionManager, current_user_id
from authgate.shared.errors.validation import raise_validation_error
from authgate.shared.logging import logger

CURRENT_USER_PATH = "/api/auth/current"


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        current_user_use_case: GetCurrentUserUseCase,
        sessions: SessionManager,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._current_user_use_case = current_user_use_case
        self._sessions = sessions

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.username, dto.password)

        response = jsonify(AuthSuccessDTO().model_dump())
        response.headers["Location"] = CURRENT_USER_PATH
        logger.info(f"auth.register: ok user_id={user.id}")
        return response, 201

    def login(self) -> Response:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._login_use_case.execute(dto.username, dto.password)

        response = make_response("", 204)
        self._sessions.issue_session(response, user)
        logger.info(f"auth.login: ok user_id={user.id}")
        return response

    def logout(self) -> Response:
        response = make_response("", 204)
        self._sessions.clear(response)
        return response

    def current(self) -> Response:
        user = self._current_user_use_case.execute(current_user_id())
        payload = CurrentUserDTO(
            id=user.id,
            username=user.username,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        return jsonify(payload.model_dump(mode="json"))

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["DELETE"])
        bp.add_url_rule(
            "/current",
            view_func=self._sessions.require_authentication(self.current),
            methods=["GET"],
        )
        return bp
