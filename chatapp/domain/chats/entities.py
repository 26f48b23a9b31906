# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Chat, membership and message records as seen by the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Chat:
    """A conversation. ``creator_id`` is fixed at creation."""

    id: int
    name: str
    is_group: bool
    creator_id: int
    created_at: datetime
    updated_at: datetime
    members: tuple[ChatMember, ...] = field(default=())


@dataclass(slots=True, frozen=True)
class ChatMember:
    """Membership of one user in one chat; unique per (chat_id, user_id)."""

    chat_id: int
    user_id: int
    is_admin: bool
    joined_at: datetime
    username: str | None = None


@dataclass(slots=True, frozen=True)
class Message:

    id: int
    chat_id: int
    sender_id: int
    content: str
    created_at: datetime
    updated_at: datetime
