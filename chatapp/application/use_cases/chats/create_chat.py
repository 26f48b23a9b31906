# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Multi-step chat creation.

Steps run as independent writes: create the chat, add the creator as admin,
then invite the requested members. A failure to add the creator deletes the
chat again; member invitations are best effort and are never rolled back.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from chatapp.domain.chats.entities import Chat
from chatapp.domain.chats.exceptions import CreationError
from chatapp.domain.chats.repositories import ChatRepository, MembershipRepository
from chatapp.domain.users.repositories import UserRepository
from chatapp.shared.errors.base import StorageError
from chatapp.shared.logging import logger


class CreationState(str, Enum):
    CREATED = "created"
    CREATOR_JOINED = "creator_joined"
    MEMBERS_INVITED = "members_invited"
    DONE = "done"


@dataclass(slots=True, frozen=True)
class ChatCreationResult:
    chat: Chat
    added_member_ids: tuple[int, ...]
    skipped_member_ids: tuple[int, ...]

    @property
    def requested(self) -> int:
        return len(self.added_member_ids) + len(self.skipped_member_ids)

    @property
    def complete(self) -> bool:
        return not self.skipped_member_ids


class CreateChatUseCase:
    def __init__(
        self,
        *,
        chats: ChatRepository,
        memberships: MembershipRepository,
        users: UserRepository,
    ) -> None:
        self._chats = chats
        self._memberships = memberships
        self._users = users

    def execute(
        self, name: str, is_group: bool, creator_id: int, member_ids: Iterable[int]
    ) -> ChatCreationResult:
        try:
            chat = self._chats.add(name, is_group, creator_id)
        except StorageError as exc:
            logger.error(f"chats.create: chat insert failed (creator_id={creator_id})")
            raise CreationError("create_chat") from exc
        _advance(chat.id, CreationState.CREATED)

        try:
            self._memberships.add(chat.id, creator_id, is_admin=True)
        except StorageError as exc:
            logger.error(
                f"chats.create: creator membership failed, rolling back (chat_id={chat.id})"
            )
            self._compensate(chat.id, exc)
            raise CreationError("join_creator") from exc
        _advance(chat.id, CreationState.CREATOR_JOINED)

        added, skipped = self._invite(chat.id, creator_id, member_ids)
        _advance(chat.id, CreationState.MEMBERS_INVITED)

        _advance(chat.id, CreationState.DONE)
        logger.info(
            f"chats.create: ok (chat_id={chat.id}, creator_id={creator_id}, "
            f"added={len(added)}, skipped={len(skipped)})"
        )
        return ChatCreationResult(
            chat=chat,
            added_member_ids=tuple(added),
            skipped_member_ids=tuple(skipped),
        )

    def _compensate(self, chat_id: int, cause: Exception) -> None:
        try:
            self._chats.delete(chat_id)
        except StorageError as exc:
            logger.error(
                f"chats.create: compensating delete failed, chat is orphaned "
                f"(chat_id={chat_id}, cause={type(cause).__name__})"
            )
            raise CreationError("join_creator", orphaned_chat_id=chat_id) from exc
        logger.info(f"chats.create: rolled back (chat_id={chat_id})")

    def _invite(
        self, chat_id: int, creator_id: int, member_ids: Iterable[int]
    ) -> tuple[list[int], list[int]]:
        added: list[int] = []
        skipped: list[int] = []
        for member_id in dict.fromkeys(member_ids):
            if member_id == creator_id:
                continue
            try:
                if not self._users.exists(member_id):
                    skipped.append(member_id)
                    continue
                self._memberships.add(chat_id, member_id, is_admin=False)
            except StorageError:
                logger.warning(
                    f"chats.create: member skipped (chat_id={chat_id}, user_id={member_id})"
                )
                skipped.append(member_id)
                continue
            added.append(member_id)
        return added, skipped


def _advance(chat_id: int, state: CreationState) -> None:
    logger.debug(f"chats.create: {state.value} (chat_id={chat_id})")
