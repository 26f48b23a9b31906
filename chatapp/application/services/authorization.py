# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Membership and role checks consulted before protected chat operations.

The predicates read current state from the repositories on every call and
never cache. ``authorize_*`` helpers check that the target exists before
checking permission, so an absent resource is reported as not found and a
present but forbidden one as forbidden.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from chatapp.domain.chats.exceptions import ChatNotFoundError, MessageNotFoundError
from chatapp.domain.chats.repositories import (
    ChatRepository,
    MembershipRepository,
    MessageRepository,
)
from chatapp.shared.errors.base import ForbiddenError
from chatapp.shared.logging import logger


class Role(str, Enum):
    MEMBER = "member"
    ADMIN = "admin"
    CREATOR = "creator"
    SENDER = "sender"


class ChatAction(str, Enum):
    READ = "read_chat"
    LIST_MESSAGES = "list_messages"
    SEND_MESSAGE = "send_message"
    RENAME = "rename_chat"
    ADD_MEMBER = "add_member"
    REMOVE_MEMBER = "remove_member"
    DELETE = "delete_chat"


class MessageAction(str, Enum):
    READ = "read_message"
    EDIT = "edit_message"
    DELETE = "delete_message"


CHAT_POLICY: dict[ChatAction, Role] = {
    ChatAction.READ: Role.MEMBER,
    ChatAction.LIST_MESSAGES: Role.MEMBER,
    ChatAction.SEND_MESSAGE: Role.MEMBER,
    ChatAction.RENAME: Role.ADMIN,
    ChatAction.ADD_MEMBER: Role.ADMIN,
    ChatAction.REMOVE_MEMBER: Role.ADMIN,
    ChatAction.DELETE: Role.CREATOR,
}

MESSAGE_POLICY: dict[MessageAction, Role] = {
    MessageAction.READ: Role.MEMBER,
    MessageAction.EDIT: Role.SENDER,
    MessageAction.DELETE: Role.SENDER,
}


def is_member(memberships: MembershipRepository, chat_id: int, user_id: int) -> bool:
    return memberships.exists(chat_id, user_id)


def is_admin(memberships: MembershipRepository, chat_id: int, user_id: int) -> bool:
    member = memberships.find(chat_id, user_id)
    return member is not None and member.is_admin


def is_creator(chats: ChatRepository, chat_id: int, user_id: int) -> bool:
    return chats.creator_of(chat_id) == user_id


def is_sender(messages: MessageRepository, message_id: int, user_id: int) -> bool:
    return messages.sender_of(message_id) == user_id


@dataclass(slots=True, frozen=True)
class AuthorizationGate:
    chats: ChatRepository
    memberships: MembershipRepository
    messages: MessageRepository

    def is_member(self, chat_id: int, user_id: int) -> bool:
        return is_member(self.memberships, chat_id, user_id)

    def is_admin(self, chat_id: int, user_id: int) -> bool:
        return is_admin(self.memberships, chat_id, user_id)

    def is_creator(self, chat_id: int, user_id: int) -> bool:
        return is_creator(self.chats, chat_id, user_id)

    def is_sender(self, message_id: int, user_id: int) -> bool:
        return is_sender(self.messages, message_id, user_id)

    def _chat_predicate(self, role: Role) -> Callable[[int, int], bool]:
        return {
            Role.MEMBER: self.is_member,
            Role.ADMIN: self.is_admin,
            Role.CREATOR: self.is_creator,
        }[role]

    def authorize_chat(self, action: ChatAction, chat_id: int, user_id: int) -> None:
        if not self.chats.exists(chat_id):
            raise ChatNotFoundError(chat_id)
        role = CHAT_POLICY[action]
        if not self._chat_predicate(role)(chat_id, user_id):
            logger.info(
                f"authz.chat: denied (action={action.value}, chat_id={chat_id}, "
                f"user_id={user_id}, required={role.value})"
            )
            raise ForbiddenError(action.value)

    def authorize_message(self, action: MessageAction, message_id: int, user_id: int) -> int:
        """Check ``action`` on a message and return the id of its chat."""
        chat_id = self.messages.chat_of(message_id)
        if chat_id is None:
            raise MessageNotFoundError(message_id)
        role = MESSAGE_POLICY[action]
        if role is Role.SENDER:
            allowed = self.is_sender(message_id, user_id)
        else:
            allowed = self._chat_predicate(role)(chat_id, user_id)
        if not allowed:
            logger.info(
                f"authz.message: denied (action={action.value}, message_id={message_id}, "
                f"user_id={user_id}, required={role.value})"
            )
            raise ForbiddenError(action.value)
        return chat_id


def authorize_self(caller_id: int, target_id: int, action: str) -> None:
    if caller_id != target_id:
        logger.info(
            f"authz.user: denied (action={action}, caller={caller_id}, target={target_id})"
        )
        raise ForbiddenError(action)


__all__ = [
    "AuthorizationGate",
    "CHAT_POLICY",
    "ChatAction",
    "MESSAGE_POLICY",
    "MessageAction",
    "Role",
    "authorize_self",
    "is_admin",
    "is_creator",
    "is_member",
    "is_sender",
]
