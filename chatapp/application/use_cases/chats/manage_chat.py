# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable, Sequence

from chatapp.application.services.authorization import AuthorizationGate, ChatAction
from chatapp.domain.chats.entities import Chat
from chatapp.domain.chats.repositories import ChatRepository, MembershipRepository
from chatapp.domain.users.repositories import UserRepository
from chatapp.shared.errors.base import StorageError
from chatapp.shared.logging import logger


class GetChatUseCase:
    def __init__(self, *, chats: ChatRepository, gate: AuthorizationGate) -> None:
        self._chats = chats
        self._gate = gate

    def execute(self, user_id: int, chat_id: int) -> Chat:
        self._gate.authorize_chat(ChatAction.READ, chat_id, user_id)
        return self._chats.get(chat_id, with_members=True)


class ListChatsUseCase:
    def __init__(self, *, chats: ChatRepository) -> None:
        self._chats = chats

    def execute(
        self, user_id: int, limit: int = 50, offset: int = 0, *, with_members: bool = False
    ) -> Sequence[Chat]:
        return self._chats.list_for_user(user_id, limit, offset, with_members=with_members)


class RenameChatUseCase:
    def __init__(self, *, chats: ChatRepository, gate: AuthorizationGate) -> None:
        self._chats = chats
        self._gate = gate

    def execute(self, user_id: int, chat_id: int, name: str) -> Chat:
        self._gate.authorize_chat(ChatAction.RENAME, chat_id, user_id)
        chat = self._chats.rename(chat_id, name)
        logger.info(f"chats.rename: ok (chat_id={chat_id}, user_id={user_id})")
        return chat


class DeleteChatUseCase:
    def __init__(self, *, chats: ChatRepository, gate: AuthorizationGate) -> None:
        self._chats = chats
        self._gate = gate

    def execute(self, user_id: int, chat_id: int) -> None:
        self._gate.authorize_chat(ChatAction.DELETE, chat_id, user_id)
        self._chats.delete(chat_id)
        logger.info(f"chats.delete: ok (chat_id={chat_id}, user_id={user_id})")


class AddMembersUseCase:
    def __init__(
        self,
        *,
        memberships: MembershipRepository,
        users: UserRepository,
        gate: AuthorizationGate,
    ) -> None:
        self._memberships = memberships
        self._users = users
        self._gate = gate

    def execute(self, user_id: int, chat_id: int, member_ids: Iterable[int]) -> list[int]:
        """Add members, skipping existing members and unknown users."""
        self._gate.authorize_chat(ChatAction.ADD_MEMBER, chat_id, user_id)

        added: list[int] = []
        for member_id in dict.fromkeys(member_ids):
            try:
                if self._memberships.exists(chat_id, member_id):
                    continue
                if not self._users.exists(member_id):
                    continue
                self._memberships.add(chat_id, member_id, is_admin=False)
            except StorageError:
                logger.warning(
                    f"chats.members.add: skipped (chat_id={chat_id}, user_id={member_id})"
                )
                continue
            added.append(member_id)

        logger.info(f"chats.members.add: ok (chat_id={chat_id}, added={len(added)})")
        return added


class RemoveMemberUseCase:
    def __init__(self, *, memberships: MembershipRepository, gate: AuthorizationGate) -> None:
        self._memberships = memberships
        self._gate = gate

    def execute(self, user_id: int, chat_id: int, member_id: int) -> None:
        self._gate.authorize_chat(ChatAction.REMOVE_MEMBER, chat_id, user_id)
        self._memberships.remove(chat_id, member_id)
        logger.info(
            f"chats.members.remove: ok (chat_id={chat_id}, member_id={member_id}, by={user_id})"
        )
