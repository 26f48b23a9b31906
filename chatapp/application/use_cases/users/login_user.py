# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from chatapp.domain.users.exceptions import InvalidCredentialsError
from chatapp.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from chatapp.shared.logging import logger


class LoginUserUseCase:
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
        self._dummy_hash: str | None = None

    def _unknown_user_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash("unknown-user-password")
        return self._dummy_hash

    def execute(self, username: str, password: str) -> str:
        user = self._users.find_by_username(username)
        if user is None:
            # Same hashing cost as a real account, then reject.
            self._password_hasher.verify(password, self._unknown_user_hash())
            password_valid = False
        else:
            password_valid = self._password_hasher.verify(password, user.password_hash)

        if not user or not password_valid:
            logger.info(f"users.login: rejected (username={username})")
            raise InvalidCredentialsError()

        self._users.touch_last_seen(user.id, datetime.now(UTC))
        logger.info(f"users.login: ok (user_id={user.id})")
        return self._tokens.issue(user.id, user.username)
