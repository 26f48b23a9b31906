# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Chat, ChatMember, Message


class ChatRepository(Protocol):
    def add(self, name: str, is_group: bool, creator_id: int) -> Chat: ...
    def get(self, chat_id: int, *, with_members: bool = False) -> Chat: ...
    def exists(self, chat_id: int) -> bool: ...
    def creator_of(self, chat_id: int) -> int | None: ...
    def rename(self, chat_id: int, name: str) -> Chat: ...
    def delete(self, chat_id: int) -> None: ...
    def list_for_user(
        self, user_id: int, limit: int, offset: int, *, with_members: bool = False
    ) -> Sequence[Chat]: ...


class MembershipRepository(Protocol):
    def add(self, chat_id: int, user_id: int, *, is_admin: bool = False) -> ChatMember: ...
    def find(self, chat_id: int, user_id: int) -> ChatMember | None: ...
    def exists(self, chat_id: int, user_id: int) -> bool: ...
    def remove(self, chat_id: int, user_id: int) -> None: ...


class MessageRepository(Protocol):
    def add(self, chat_id: int, sender_id: int, content: str) -> Message: ...
    def get(self, message_id: int) -> Message: ...
    def sender_of(self, message_id: int) -> int | None: ...
    def chat_of(self, message_id: int) -> int | None: ...
    def update_content(self, message_id: int, content: str) -> Message: ...
    def delete(self, message_id: int) -> None: ...
    def list_for_chat(self, chat_id: int, limit: int, offset: int) -> Sequence[Message]: ...
