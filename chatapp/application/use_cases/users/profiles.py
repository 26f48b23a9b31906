# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Profile use cases. A user may only change or delete their own profile."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from chatapp.application.services.authorization import authorize_self
from chatapp.domain.users.entities import User
from chatapp.domain.users.exceptions import UserNotFoundError
from chatapp.domain.users.repositories import PasswordHasher, UserRepository
from chatapp.shared.logging import logger


class GetUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> User:
        return self._users.get(user_id)


class ListUsersUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, limit: int = 50, offset: int = 0) -> Sequence[User]:
        return self._users.list(limit, offset)


class UpdateUserUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self,
        caller_id: int,
        target_id: int,
        *,
        display_name: str | None = None,
        password: str | None = None,
    ) -> User:
        if not self._users.exists(target_id):
            raise UserNotFoundError(target_id)
        authorize_self(caller_id, target_id, "update_user")

        password_hash = self._password_hasher.hash(password) if password else None
        user = self._users.update(
            target_id, display_name=display_name or None, password_hash=password_hash
        )
        logger.info(
            f"users.update: ok (user_id={target_id}, password_changed={password_hash is not None})"
        )
        return user


class DeleteUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, caller_id: int, target_id: int) -> None:
        if not self._users.exists(target_id):
            raise UserNotFoundError(target_id)
        authorize_self(caller_id, target_id, "delete_user")
        self._users.delete(target_id)
        logger.info(f"users.delete: ok (user_id={target_id})")


class TouchLastSeenUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> None:
        self._users.touch_last_seen(user_id, datetime.now(UTC))
