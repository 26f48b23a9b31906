# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from chatapp.domain.chats.entities import Chat as DomainChat
from chatapp.domain.chats.entities import ChatMember as DomainChatMember
from chatapp.domain.chats.entities import Message as DomainMessage
from chatapp.domain.chats.exceptions import ChatNotFoundError, MessageNotFoundError
from chatapp.domain.chats.repositories import (
    ChatRepository,
    MembershipRepository,
    MessageRepository,
)
from chatapp.infrastructure.db.models import Chat, ChatMember, Message
from chatapp.infrastructure.repositories.errors import storage_operation
from chatapp.infrastructure.unit_of_work import unit_of_work_scope


def _member_to_domain(row: ChatMember, *, with_username: bool = False) -> DomainChatMember:
    return DomainChatMember(
        chat_id=row.chat_id,
        user_id=row.user_id,
        is_admin=bool(row.is_admin),
        joined_at=row.joined_at,
        username=row.user.username if with_username else None,
    )


def _chat_to_domain(row: Chat, *, with_members: bool = False) -> DomainChat:
    members: tuple[DomainChatMember, ...] = ()
    if with_members:
        members = tuple(
            _member_to_domain(member, with_username=True)
            for member in sorted(row.members, key=lambda m: m.id)
        )
    return DomainChat(
        id=row.id,
        name=row.name,
        is_group=bool(row.is_group),
        creator_id=row.creator_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        members=members,
    )


def _message_to_domain(row: Message) -> DomainMessage:
    return DomainMessage(
        id=row.id,
        chat_id=row.chat_id,
        sender_id=row.sender_id,
        content=row.content,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyChatRepository(ChatRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    @storage_operation("chats.add")
    def add(self, name: str, is_group: bool, creator_id: int) -> DomainChat:
        with unit_of_work_scope(self._session_factory) as session:
            row = Chat(name=name, is_group=is_group, creator_id=creator_id)
            session.add(row)
            session.flush()
            return _chat_to_domain(row)

    @storage_operation("chats.get")
    def get(self, chat_id: int, *, with_members: bool = False) -> DomainChat:
        with unit_of_work_scope(self._session_factory) as session:
            stmt = select(Chat).where(Chat.id == chat_id)
            if with_members:
                stmt = stmt.options(selectinload(Chat.members).selectinload(ChatMember.user))
            row = session.scalars(stmt).first()
            if row is None:
                raise ChatNotFoundError(chat_id)
            return _chat_to_domain(row, with_members=with_members)

    @storage_operation("chats.exists")
    def exists(self, chat_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return session.scalar(select(Chat.id).where(Chat.id == chat_id)) is not None

    @storage_operation("chats.creator_of")
    def creator_of(self, chat_id: int) -> int | None:
        with unit_of_work_scope(self._session_factory) as session:
            return session.scalar(select(Chat.creator_id).where(Chat.id == chat_id))

    @storage_operation("chats.rename")
    def rename(self, chat_id: int, name: str) -> DomainChat:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Chat, chat_id)
            if row is None:
                raise ChatNotFoundError(chat_id)
            row.name = name
            session.flush()
            return _chat_to_domain(row)

    @storage_operation("chats.delete")
    def delete(self, chat_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Chat, chat_id)
            if row is None:
                raise ChatNotFoundError(chat_id)
            session.delete(row)

    @storage_operation("chats.list_for_user")
    def list_for_user(
        self, user_id: int, limit: int, offset: int, *, with_members: bool = False
    ) -> Sequence[DomainChat]:
        with unit_of_work_scope(self._session_factory) as session:
            stmt = (
                select(Chat)
                .join(ChatMember, ChatMember.chat_id == Chat.id)
                .where(ChatMember.user_id == user_id)
                .order_by(Chat.updated_at.desc(), Chat.id.desc())
                .limit(limit)
                .offset(offset)
            )
            if with_members:
                stmt = stmt.options(selectinload(Chat.members).selectinload(ChatMember.user))
            rows = session.scalars(stmt).all()
            return [_chat_to_domain(row, with_members=with_members) for row in rows]


class SqlAlchemyMembershipRepository(MembershipRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    @storage_operation("memberships.add")
    def add(self, chat_id: int, user_id: int, *, is_admin: bool = False) -> DomainChatMember:
        with unit_of_work_scope(self._session_factory) as session:
            row = ChatMember(chat_id=chat_id, user_id=user_id, is_admin=is_admin)
            session.add(row)
            session.flush()
            return _member_to_domain(row)

    @storage_operation("memberships.find")
    def find(self, chat_id: int, user_id: int) -> DomainChatMember | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(
                select(ChatMember).where(
                    ChatMember.chat_id == chat_id, ChatMember.user_id == user_id
                )
            ).first()
            return _member_to_domain(row) if row else None

    @storage_operation("memberships.exists")
    def exists(self, chat_id: int, user_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            found = session.scalar(
                select(ChatMember.id).where(
                    ChatMember.chat_id == chat_id, ChatMember.user_id == user_id
                )
            )
            return found is not None

    @storage_operation("memberships.remove")
    def remove(self, chat_id: int, user_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                delete(ChatMember).where(
                    ChatMember.chat_id == chat_id, ChatMember.user_id == user_id
                )
            )


class SqlAlchemyMessageRepository(MessageRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    @storage_operation("messages.add")
    def add(self, chat_id: int, sender_id: int, content: str) -> DomainMessage:
        with unit_of_work_scope(self._session_factory) as session:
            row = Message(chat_id=chat_id, sender_id=sender_id, content=content)
            session.add(row)
            session.flush()
            return _message_to_domain(row)

    @storage_operation("messages.get")
    def get(self, message_id: int) -> DomainMessage:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Message, message_id)
            if row is None:
                raise MessageNotFoundError(message_id)
            return _message_to_domain(row)

    @storage_operation("messages.sender_of")
    def sender_of(self, message_id: int) -> int | None:
        with unit_of_work_scope(self._session_factory) as session:
            return session.scalar(select(Message.sender_id).where(Message.id == message_id))

    @storage_operation("messages.chat_of")
    def chat_of(self, message_id: int) -> int | None:
        with unit_of_work_scope(self._session_factory) as session:
            return session.scalar(select(Message.chat_id).where(Message.id == message_id))

    @storage_operation("messages.update_content")
    def update_content(self, message_id: int, content: str) -> DomainMessage:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Message, message_id)
            if row is None:
                raise MessageNotFoundError(message_id)
            row.content = content
            session.flush()
            return _message_to_domain(row)

    @storage_operation("messages.delete")
    def delete(self, message_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Message, message_id)
            if row is None:
                raise MessageNotFoundError(message_id)
            session.delete(row)

    @storage_operation("messages.list_for_chat")
    def list_for_chat(self, chat_id: int, limit: int, offset: int) -> Sequence[DomainMessage]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(
                select(Message)
                .where(Message.chat_id == chat_id)
                .order_by(Message.created_at.desc(), Message.id.desc())
                .limit(limit)
                .offset(offset)
            ).all()
            return [_message_to_domain(row) for row in rows]
