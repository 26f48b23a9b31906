# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str = field(repr=False)
    display_name: str
    created_at: datetime
    last_seen: datetime | None = None


@dataclass(slots=True, frozen=True)
class TokenPayload:
    """Identity claims carried inside an encrypted session token."""

    user_id: int
    username: str
    issued_at: datetime
    expire_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expire_at
