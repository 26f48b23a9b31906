# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from chatapp.application.services.authorization import (
    AuthorizationGate,
    ChatAction,
    MessageAction,
)
from chatapp.domain.chats.entities import Message
from chatapp.domain.chats.repositories import MessageRepository
from chatapp.shared.logging import logger


class SendMessageUseCase:
    def __init__(self, *, messages: MessageRepository, gate: AuthorizationGate) -> None:
        self._messages = messages
        self._gate = gate

    def execute(self, sender_id: int, chat_id: int, content: str) -> Message:
        self._gate.authorize_chat(ChatAction.SEND_MESSAGE, chat_id, sender_id)
        message = self._messages.add(chat_id, sender_id, content)
        logger.info(
            f"messages.send: ok (message_id={message.id}, chat_id={chat_id}, sender_id={sender_id})"
        )
        return message


class GetMessageUseCase:
    def __init__(self, *, messages: MessageRepository, gate: AuthorizationGate) -> None:
        self._messages = messages
        self._gate = gate

    def execute(self, user_id: int, message_id: int) -> Message:
        self._gate.authorize_message(MessageAction.READ, message_id, user_id)
        return self._messages.get(message_id)


class ListMessagesUseCase:
    def __init__(self, *, messages: MessageRepository, gate: AuthorizationGate) -> None:
        self._messages = messages
        self._gate = gate

    def execute(
        self, user_id: int, chat_id: int, limit: int = 50, offset: int = 0
    ) -> Sequence[Message]:
        self._gate.authorize_chat(ChatAction.LIST_MESSAGES, chat_id, user_id)
        return self._messages.list_for_chat(chat_id, limit, offset)


class EditMessageUseCase:
    def __init__(self, *, messages: MessageRepository, gate: AuthorizationGate) -> None:
        self._messages = messages
        self._gate = gate

    def execute(self, user_id: int, message_id: int, content: str) -> Message:
        self._gate.authorize_message(MessageAction.EDIT, message_id, user_id)
        message = self._messages.update_content(message_id, content)
        logger.info(f"messages.edit: ok (message_id={message_id}, user_id={user_id})")
        return message


class DeleteMessageUseCase:
    def __init__(self, *, messages: MessageRepository, gate: AuthorizationGate) -> None:
        self._messages = messages
        self._gate = gate

    def execute(self, user_id: int, message_id: int) -> None:
        self._gate.authorize_message(MessageAction.DELETE, message_id, user_id)
        self._messages.delete(message_id)
        logger.info(f"messages.delete: ok (message_id={message_id}, user_id={user_id})")
