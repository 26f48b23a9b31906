# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from chatapp.domain.users.entities import User
from chatapp.domain.users.exceptions import UserAlreadyExistsError
from chatapp.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from chatapp.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(
        self, username: str, password: str, display_name: str | None = None
    ) -> tuple[User, str]:
        existing = self._users.find_by_username(username)
        if existing:
            raise UserAlreadyExistsError()
        now = datetime.now(UTC)
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            username=username,
            password_hash=hashed,
            display_name=display_name or username,
            created_at=now,
        )
        persisted = self._users.add(user)
        token = self._tokens.issue(persisted.id, persisted.username)
        logger.info(f"users.register: ok (user_id={persisted.id})")
        return persisted, token
