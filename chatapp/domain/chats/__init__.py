# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Chat, ChatMember, Message
from .exceptions import ChatNotFoundError, CreationError, MessageNotFoundError
from .repositories import ChatRepository, MembershipRepository, MessageRepository

__all__ = [
    "Chat",
    "ChatMember",
    "ChatNotFoundError",
    "ChatRepository",
    "CreationError",
    "MembershipRepository",
    "Message",
    "MessageNotFoundError",
    "MessageRepository",
]
