from __future__ import annotations

import pytest

from chatapp.application.services.authorization import (
    AuthorizationGate,
    ChatAction,
    MessageAction,
    authorize_self,
)
from chatapp.application.use_cases.chats.manage_chat import RenameChatUseCase
from chatapp.domain.chats.exceptions import ChatNotFoundError, MessageNotFoundError
from chatapp.shared.errors import ForbiddenError, NotFoundError
from chatapp.tests.fakes import (
    InMemoryChatRepository,
    InMemoryMembershipRepository,
    InMemoryMessageRepository,
)

CREATOR, ADMIN, MEMBER, OUTSIDER = 1, 2, 3, 4


@pytest.fixture()
def chat_id(
    chats: InMemoryChatRepository, memberships: InMemoryMembershipRepository
) -> int:
    chat = chats.add("team", True, CREATOR)
    memberships.add(chat.id, CREATOR, is_admin=True)
    memberships.add(chat.id, ADMIN, is_admin=True)
    memberships.add(chat.id, MEMBER)
    return chat.id


def test_is_admin_false_without_membership(gate: AuthorizationGate, chat_id: int) -> None:
    assert gate.is_admin(chat_id, OUTSIDER) is False


def test_is_admin_only_for_admin_flag(gate: AuthorizationGate, chat_id: int) -> None:
    assert gate.is_admin(chat_id, ADMIN) is True
    assert gate.is_admin(chat_id, MEMBER) is False


def test_is_member(gate: AuthorizationGate, chat_id: int) -> None:
    assert gate.is_member(chat_id, MEMBER) is True
    assert gate.is_member(chat_id, OUTSIDER) is False


def test_is_creator(gate: AuthorizationGate, chat_id: int) -> None:
    assert gate.is_creator(chat_id, CREATOR) is True
    assert gate.is_creator(chat_id, ADMIN) is False
    assert gate.is_creator(999, CREATOR) is False


def test_is_sender(
    gate: AuthorizationGate, chat_id: int, messages: InMemoryMessageRepository
) -> None:
    message = messages.add(chat_id, MEMBER, "hi")
    assert gate.is_sender(message.id, MEMBER) is True
    assert gate.is_sender(message.id, ADMIN) is False
    assert gate.is_sender(999, MEMBER) is False


def test_predicates_read_current_state(
    gate: AuthorizationGate, chat_id: int, memberships: InMemoryMembershipRepository
) -> None:
    assert gate.is_member(chat_id, MEMBER) is True
    memberships.remove(chat_id, MEMBER)
    assert gate.is_member(chat_id, MEMBER) is False


@pytest.mark.parametrize(
    ("action", "allowed", "denied"),
    [
        (ChatAction.READ, MEMBER, OUTSIDER),
        (ChatAction.SEND_MESSAGE, MEMBER, OUTSIDER),
        (ChatAction.RENAME, ADMIN, MEMBER),
        (ChatAction.ADD_MEMBER, ADMIN, MEMBER),
        (ChatAction.REMOVE_MEMBER, ADMIN, MEMBER),
        (ChatAction.DELETE, CREATOR, ADMIN),
    ],
)
def test_chat_policy(
    gate: AuthorizationGate, chat_id: int, action: ChatAction, allowed: int, denied: int
) -> None:
    gate.authorize_chat(action, chat_id, allowed)
    with pytest.raises(ForbiddenError):
        gate.authorize_chat(action, chat_id, denied)


def test_missing_chat_is_not_found_before_permission(gate: AuthorizationGate) -> None:
    with pytest.raises(ChatNotFoundError) as exc_info:
        gate.authorize_chat(ChatAction.RENAME, 404, OUTSIDER)
    assert exc_info.value.code == "chat_not_found"


def test_non_admin_rename_is_forbidden_not_not_found(
    chats: InMemoryChatRepository, gate: AuthorizationGate, chat_id: int
) -> None:
    use_case = RenameChatUseCase(chats=chats, gate=gate)

    with pytest.raises(ForbiddenError) as exc_info:
        use_case.execute(MEMBER, chat_id, "renamed")

    assert not isinstance(exc_info.value, NotFoundError)
    assert exc_info.value.status == 403
    assert chats.get(chat_id).name == "team"


def test_message_edit_only_by_sender(
    gate: AuthorizationGate, chat_id: int, messages: InMemoryMessageRepository
) -> None:
    message = messages.add(chat_id, MEMBER, "hi")

    assert gate.authorize_message(MessageAction.EDIT, message.id, MEMBER) == chat_id
    with pytest.raises(ForbiddenError):
        gate.authorize_message(MessageAction.EDIT, message.id, ADMIN)


def test_message_read_requires_membership(
    gate: AuthorizationGate, chat_id: int, messages: InMemoryMessageRepository
) -> None:
    message = messages.add(chat_id, MEMBER, "hi")

    gate.authorize_message(MessageAction.READ, message.id, ADMIN)
    with pytest.raises(ForbiddenError):
        gate.authorize_message(MessageAction.READ, message.id, OUTSIDER)


def test_missing_message_is_not_found(gate: AuthorizationGate) -> None:
    with pytest.raises(MessageNotFoundError):
        gate.authorize_message(MessageAction.DELETE, 404, MEMBER)


def test_authorize_self() -> None:
    authorize_self(5, 5, "update_user")
    with pytest.raises(ForbiddenError) as exc_info:
        authorize_self(5, 6, "update_user")
    assert exc_info.value.to_dict() == {"error": "forbidden", "context": {"action": "update_user"}}
