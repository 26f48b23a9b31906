from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from flask import Flask
from flask.testing import FlaskClient

from chatapp.application.use_cases.chats.create_chat import ChatCreationResult
from chatapp.domain.chats.entities import Chat
from chatapp.domain.chats.exceptions import ChatNotFoundError
from chatapp.infrastructure.auth import install_token_service
from chatapp.interfaces.http.controllers.chats_controller import ChatsController
from chatapp.shared.errors import ForbiddenError
from chatapp.shared.middleware.error_handler import configure_error_handling
from chatapp.tests.fakes import NOW, StaticTokenService

AUTH = {"Authorization": "Bearer token-1-alice"}


def _chat(chat_id: int = 10, name: str = "team") -> Chat:
    return Chat(
        id=chat_id,
        name=name,
        is_group=True,
        creator_id=1,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture()
def use_cases() -> dict[str, MagicMock]:
    return {
        name: MagicMock()
        for name in (
            "create_chat",
            "get_chat",
            "list_chats",
            "rename_chat",
            "delete_chat",
            "add_members",
            "remove_member",
        )
    }


@pytest.fixture()
def client(use_cases: dict[str, MagicMock]) -> FlaskClient:
    app = Flask(__name__)
    configure_error_handling(app)
    install_token_service(app, StaticTokenService())
    app.register_blueprint(ChatsController(**use_cases).as_blueprint())
    return app.test_client()


def test_requests_without_token_are_unauthorized(client: FlaskClient) -> None:
    response = client.get("/api/chats")
    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized"}


def test_invalid_token_is_rejected(client: FlaskClient) -> None:
    response = client.get("/api/chats", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid_token"}


def test_create_chat_reports_partial_invitations(
    client: FlaskClient, use_cases: dict[str, MagicMock]
) -> None:
    use_cases["create_chat"].execute.return_value = ChatCreationResult(
        chat=_chat(), added_member_ids=(2,), skipped_member_ids=(3,)
    )

    response = client.post(
        "/api/chats",
        json={"name": "team", "is_group": True, "member_ids": [2, 3]},
        headers=AUTH,
    )

    assert response.status_code == 201
    use_cases["create_chat"].execute.assert_called_once_with("team", True, 1, [2, 3])
    payload = response.get_json()
    assert payload["chat"]["id"] == 10
    assert payload["added_member_ids"] == [2]
    assert payload["skipped_member_ids"] == [3]


def test_create_chat_requires_members(
    client: FlaskClient, use_cases: dict[str, MagicMock]
) -> None:
    response = client.post("/api/chats", json={"name": "team", "member_ids": []}, headers=AUTH)

    assert response.status_code == 422
    assert response.get_json()["context"]["fields"] == ["member_ids"]
    use_cases["create_chat"].execute.assert_not_called()


def test_rename_forbidden_maps_to_403(
    client: FlaskClient, use_cases: dict[str, MagicMock]
) -> None:
    use_cases["rename_chat"].execute.side_effect = ForbiddenError("rename_chat")

    response = client.patch("/api/chats/10", json={"name": "x"}, headers=AUTH)

    assert response.status_code == 403
    assert response.get_json() == {"error": "forbidden", "context": {"action": "rename_chat"}}


def test_missing_chat_maps_to_404(client: FlaskClient, use_cases: dict[str, MagicMock]) -> None:
    use_cases["get_chat"].execute.side_effect = ChatNotFoundError(10)

    response = client.get("/api/chats/10", headers=AUTH)

    assert response.status_code == 404
    assert response.get_json() == {"error": "chat_not_found", "context": {"chat_id": 10}}


def test_list_passes_paging(client: FlaskClient, use_cases: dict[str, MagicMock]) -> None:
    use_cases["list_chats"].execute.return_value = [_chat()]

    response = client.get("/api/chats?limit=5&offset=10", headers=AUTH)

    assert response.status_code == 200
    assert [c["name"] for c in response.get_json()["items"]] == ["team"]
    use_cases["list_chats"].execute.assert_called_once_with(1, 5, 10, with_members=True)


def test_remove_member(client: FlaskClient, use_cases: dict[str, MagicMock]) -> None:
    response = client.delete("/api/chats/10/members/2", headers=AUTH)

    assert response.status_code == 204
    use_cases["remove_member"].execute.assert_called_once_with(1, 10, 2)
