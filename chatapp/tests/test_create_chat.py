from __future__ import annotations

import pytest

from chatapp.application.use_cases.chats.create_chat import CreateChatUseCase
from chatapp.domain.chats.exceptions import CreationError
from chatapp.shared.errors import StorageError
from chatapp.tests.fakes import (
    InMemoryChatRepository,
    InMemoryMembershipRepository,
    InMemoryUserRepository,
)


@pytest.fixture()
def use_case(
    chats: InMemoryChatRepository,
    memberships: InMemoryMembershipRepository,
    users: InMemoryUserRepository,
) -> CreateChatUseCase:
    return CreateChatUseCase(chats=chats, memberships=memberships, users=users)


def test_missing_member_is_skipped(
    use_case: CreateChatUseCase,
    users: InMemoryUserRepository,
    memberships: InMemoryMembershipRepository,
) -> None:
    creator = users.seed("creator")
    m1 = users.seed("m1")
    m2 = 99

    result = use_case.execute("team", True, creator.id, [creator.id, m1.id, m2])

    members = memberships.for_chat(result.chat.id)
    assert len(members) == 2
    assert memberships.find(result.chat.id, creator.id).is_admin is True
    assert memberships.find(result.chat.id, m1.id).is_admin is False
    assert result.added_member_ids == (m1.id,)
    assert result.skipped_member_ids == (m2,)
    assert result.requested == 2
    assert result.complete is False


def test_duplicates_are_invited_once(
    use_case: CreateChatUseCase, users: InMemoryUserRepository
) -> None:
    creator = users.seed("creator")
    m1 = users.seed("m1")

    result = use_case.execute("dm", False, creator.id, [m1.id, m1.id])

    assert result.added_member_ids == (m1.id,)
    assert result.complete is True


def test_failing_member_insert_is_skipped(
    use_case: CreateChatUseCase,
    users: InMemoryUserRepository,
    memberships: InMemoryMembershipRepository,
) -> None:
    creator = users.seed("creator")
    m1 = users.seed("m1")
    m2 = users.seed("m2")
    memberships.fail_for.add(m1.id)

    result = use_case.execute("team", True, creator.id, [m1.id, m2.id])

    assert result.added_member_ids == (m2.id,)
    assert result.skipped_member_ids == (m1.id,)


def test_creator_membership_failure_leaves_no_chat(
    use_case: CreateChatUseCase,
    users: InMemoryUserRepository,
    chats: InMemoryChatRepository,
    memberships: InMemoryMembershipRepository,
) -> None:
    creator = users.seed("creator")
    m1 = users.seed("m1")
    memberships.fail_for.add(creator.id)

    with pytest.raises(CreationError) as exc_info:
        use_case.execute("team", True, creator.id, [m1.id])

    assert chats.chats == {}
    assert memberships.records == {}
    assert exc_info.value.context == {"step": "join_creator"}


def test_failed_compensation_reports_orphan(
    use_case: CreateChatUseCase,
    users: InMemoryUserRepository,
    chats: InMemoryChatRepository,
    memberships: InMemoryMembershipRepository,
) -> None:
    creator = users.seed("creator")
    memberships.fail_for.add(creator.id)
    chats.fail_delete = True

    with pytest.raises(CreationError) as exc_info:
        use_case.execute("team", True, creator.id, [2])

    orphan = next(iter(chats.chats))
    assert exc_info.value.context == {"step": "join_creator", "orphaned_chat_id": orphan}


def test_chat_insert_failure(
    users: InMemoryUserRepository, memberships: InMemoryMembershipRepository
) -> None:
    class FailingChats(InMemoryChatRepository):
        def add(self, name: str, is_group: bool, creator_id: int):
            raise StorageError("chats.add")

    use_case = CreateChatUseCase(chats=FailingChats(), memberships=memberships, users=users)

    with pytest.raises(CreationError) as exc_info:
        use_case.execute("team", True, users.seed("creator").id, [2])

    assert exc_info.value.code == "chat_creation_failed"
    assert exc_info.value.context == {"step": "create_chat"}
