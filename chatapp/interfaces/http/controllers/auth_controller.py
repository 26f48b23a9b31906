# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from chatapp.application.use_cases.users.login_user import LoginUserUseCase
from chatapp.application.use_cases.users.register_user import RegisterUserUseCase
from chatapp.interfaces.http.controllers.common import client_ip, parse_json
from chatapp.interfaces.http.dto.auth import (
    LoginRequestDTO,
    RegisterRequestDTO,
    TokenResponseDTO,
)
from chatapp.interfaces.http.dto.users import UserProfileDTO
from chatapp.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        token_ttl_seconds: int,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._token_ttl_seconds = token_ttl_seconds

    def _token_body(self, token: str) -> dict[str, object]:
        return TokenResponseDTO(token=token, expires_in=self._token_ttl_seconds).model_dump()

    def register(self) -> tuple[Response, int]:
        dto = parse_json(RegisterRequestDTO)

        user, token = self._register_use_case.execute(
            dto.username, dto.password, dto.display_name
        )

        payload = self._token_body(token)
        payload["user"] = UserProfileDTO.model_validate(user).model_dump(mode="json")
        logger.info(f"auth.register: ok (user_id={user.id}, ip={client_ip()})")
        return jsonify(payload), 201

    def login(self) -> tuple[Response, int]:
        dto = parse_json(LoginRequestDTO)
        token = self._login_use_case.execute(dto.username, dto.password)
        logger.info(f"auth.login: ok (username={dto.username}, ip={client_ip()})")
        return jsonify(self._token_body(token)), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
