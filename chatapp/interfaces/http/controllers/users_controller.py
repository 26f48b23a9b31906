# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from chatapp.application.use_cases.users.profiles import (
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    TouchLastSeenUseCase,
    UpdateUserUseCase,
)
from chatapp.infrastructure.auth import auth_required, authed_request
from chatapp.interfaces.http.controllers.common import parse_json, parse_query
from chatapp.interfaces.http.dto.users import (
    PageQueryDTO,
    UpdateUserRequestDTO,
    UserProfileDTO,
)


def _profile(user) -> dict[str, object]:
    return UserProfileDTO.model_validate(user).model_dump(mode="json")


class UsersController:
    def __init__(
        self,
        *,
        get_user: GetUserUseCase,
        list_users: ListUsersUseCase,
        update_user: UpdateUserUseCase,
        delete_user: DeleteUserUseCase,
        touch_last_seen: TouchLastSeenUseCase,
    ) -> None:
        self._get_user = get_user
        self._list_users = list_users
        self._update_user = update_user
        self._delete_user = delete_user
        self._touch_last_seen = touch_last_seen

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api")
        bp.add_url_rule("/users", view_func=self.list_users, methods=["GET"])
        bp.add_url_rule("/users/<int:user_id>", view_func=self.get_user, methods=["GET"])
        bp.add_url_rule("/users/<int:user_id>", view_func=self.update_user, methods=["PATCH"])
        bp.add_url_rule("/users/<int:user_id>", view_func=self.delete_user, methods=["DELETE"])
        bp.add_url_rule("/users/me/seen", view_func=self.touch_last_seen, methods=["POST"])
        return bp

    @auth_required
    def list_users(self) -> Response:
        page = parse_query(PageQueryDTO)
        users = self._list_users.execute(page.limit, page.offset)
        return jsonify({"items": [_profile(u) for u in users]})

    @auth_required
    def get_user(self, user_id: int) -> Response:
        return jsonify(_profile(self._get_user.execute(user_id)))

    @auth_required
    def update_user(self, user_id: int) -> Response:
        dto = parse_json(UpdateUserRequestDTO)
        user = self._update_user.execute(
            authed_request().user_id,
            user_id,
            display_name=dto.display_name,
            password=dto.password,
        )
        return jsonify(_profile(user))

    @auth_required
    def delete_user(self, user_id: int) -> tuple[str, int]:
        self._delete_user.execute(authed_request().user_id, user_id)
        return "", 204

    @auth_required
    def touch_last_seen(self) -> tuple[str, int]:
        self._touch_last_seen.execute(authed_request().user_id)
        return "", 204
