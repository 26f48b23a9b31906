# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from .entities import TokenPayload, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def get(self, user_id: int) -> User: ...
    def exists(self, user_id: int) -> bool: ...
    def add(self, user: User) -> User: ...
    def update(
        self,
        user_id: int,
        *,
        display_name: str | None = None,
        password_hash: str | None = None,
    ) -> User: ...
    def touch_last_seen(self, user_id: int, seen_at: datetime) -> None: ...
    def delete(self, user_id: int) -> None: ...
    def list(self, limit: int, offset: int) -> Sequence[User]: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, user_id: int, username: str) -> str: ...
    def verify(self, token: str) -> TokenPayload: ...
