# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.authorization import AuthorizationGate, ChatAction, MessageAction
from .services.password_hashing import WerkzeugPasswordHasher
from .use_cases.chats.create_chat import ChatCreationResult, CreateChatUseCase

__all__ = [
    "AuthorizationGate",
    "ChatAction",
    "ChatCreationResult",
    "CreateChatUseCase",
    "MessageAction",
    "WerkzeugPasswordHasher",
]
