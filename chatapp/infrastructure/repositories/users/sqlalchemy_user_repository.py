# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chatapp.domain.users.entities import User as DomainUser
from chatapp.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from chatapp.domain.users.repositories import UserRepository
from chatapp.infrastructure.db.models import User
from chatapp.infrastructure.repositories.errors import storage_operation
from chatapp.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        display_name=row.display_name,
        created_at=row.created_at,
        last_seen=row.last_seen,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    @storage_operation("users.find_by_username")
    def find_by_username(self, username: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.username == username)).first()
            return _to_domain(row) if row else None

    @storage_operation("users.find_by_id")
    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def get(self, user_id: int) -> DomainUser:
        user = self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    @storage_operation("users.exists")
    def exists(self, user_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            return session.scalar(select(User.id).where(User.id == user_id)) is not None

    @storage_operation("users.add")
    def add(self, user: DomainUser) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=user.username,
                    password_hash=user.password_hash,
                    display_name=user.display_name,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            # Concurrent registration of the same username.
            raise UserAlreadyExistsError() from exc

    @storage_operation("users.update")
    def update(
        self,
        user_id: int,
        *,
        display_name: str | None = None,
        password_hash: str | None = None,
    ) -> DomainUser:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            if row is None:
                raise UserNotFoundError(user_id)
            if display_name is not None:
                row.display_name = display_name
            if password_hash is not None:
                row.password_hash = password_hash
            session.flush()
            return _to_domain(row)

    @storage_operation("users.touch_last_seen")
    def touch_last_seen(self, user_id: int, seen_at: datetime) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            if row is None:
                raise UserNotFoundError(user_id)
            row.last_seen = seen_at

    @storage_operation("users.delete")
    def delete(self, user_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            if row is None:
                raise UserNotFoundError(user_id)
            session.delete(row)

    @storage_operation("users.list")
    def list(self, limit: int, offset: int) -> Sequence[DomainUser]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(
                select(User).order_by(User.username.asc()).limit(limit).offset(offset)
            ).all()
            return [_to_domain(row) for row in rows]
