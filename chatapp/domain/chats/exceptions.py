# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from chatapp.shared.errors.base import InfrastructureError, NotFoundError


class ChatNotFoundError(NotFoundError):
    def __init__(self, chat_id: int) -> None:
        super().__init__("chat", chat_id)


class MessageNotFoundError(NotFoundError):
    def __init__(self, message_id: int) -> None:
        super().__init__("message", message_id)


class CreationError(InfrastructureError):
    def __init__(self, step: str, *, orphaned_chat_id: int | None = None) -> None:
        context: dict[str, object] = {"step": step}
        if orphaned_chat_id is not None:
            context["orphaned_chat_id"] = orphaned_chat_id
        super().__init__("chat_creation_failed", context=context)
