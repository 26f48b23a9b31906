from __future__ import annotations

from collections.abc import Iterator

import pytest
from cryptography.fernet import Fernet
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from chatapp.application.services.authorization import AuthorizationGate
from chatapp.infrastructure.db import Base, models  # noqa: F401
from chatapp.tests.fakes import (
    NOW,
    InMemoryChatRepository,
    InMemoryMembershipRepository,
    InMemoryMessageRepository,
    InMemoryUserRepository,
    MutableClock,
)


@pytest.fixture()
def clock() -> MutableClock:
    return MutableClock(NOW)


@pytest.fixture()
def fernet_key() -> bytes:
    return Fernet.generate_key()


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def memberships() -> InMemoryMembershipRepository:
    return InMemoryMembershipRepository()


@pytest.fixture()
def chats(memberships: InMemoryMembershipRepository) -> InMemoryChatRepository:
    return InMemoryChatRepository(memberships)


@pytest.fixture()
def messages() -> InMemoryMessageRepository:
    return InMemoryMessageRepository()


@pytest.fixture()
def gate(
    chats: InMemoryChatRepository,
    memberships: InMemoryMembershipRepository,
    messages: InMemoryMessageRepository,
) -> AuthorizationGate:
    return AuthorizationGate(chats=chats, memberships=memberships, messages=messages)


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
