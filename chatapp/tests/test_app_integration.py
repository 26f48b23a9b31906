from __future__ import annotations

from collections.abc import Iterator

import pytest
from cryptography.fernet import Fernet
from flask.testing import FlaskClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from chatapp.app import create_app
from chatapp.shared.config import AppConfig, TokenConfig


@pytest.fixture()
def client(engine: Engine, session_factory: sessionmaker[Session]) -> Iterator[FlaskClient]:
    config = AppConfig(tokens=TokenConfig(key=Fernet.generate_key().decode(), lifetime_hours=1))
    app = create_app(config, engine=engine, session_factory=session_factory)
    with app.test_client() as client:
        yield client


def _register(client: FlaskClient, username: str) -> tuple[int, dict[str, str]]:
    response = client.post(
        "/api/auth/register", json={"username": username, "password": "secret123"}
    )
    assert response.status_code == 201
    payload = response.get_json()
    return payload["user"]["id"], {"Authorization": f"Bearer {payload['token']}"}


def test_register_login_and_profile(client: FlaskClient) -> None:
    user_id, _ = _register(client, "alice")

    duplicate = client.post(
        "/api/auth/register", json={"username": "alice", "password": "secret123"}
    )
    assert duplicate.status_code == 409

    bad = client.post("/api/auth/login", json={"username": "alice", "password": "wrong"})
    assert bad.status_code == 401

    login = client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.get_json()['token']}"}

    profile = client.get(f"/api/users/{user_id}", headers=headers)
    assert profile.status_code == 200
    assert profile.get_json()["last_seen"] is not None
    assert profile.headers["X-Content-Type-Options"] == "nosniff"


def test_chat_flow_enforces_roles(client: FlaskClient) -> None:
    alice_id, alice = _register(client, "alice")
    bob_id, bob = _register(client, "bob")
    _, carol = _register(client, "carol")

    created = client.post(
        "/api/chats",
        json={"name": "team", "is_group": True, "member_ids": [alice_id, bob_id, 999]},
        headers=alice,
    )
    assert created.status_code == 201
    body = created.get_json()
    chat_id = body["chat"]["id"]
    assert body["added_member_ids"] == [bob_id]
    assert body["skipped_member_ids"] == [999]

    detail = client.get(f"/api/chats/{chat_id}", headers=bob).get_json()
    assert {(m["user_id"], m["is_admin"]) for m in detail["members"]} == {
        (alice_id, True),
        (bob_id, False),
    }

    assert client.get(f"/api/chats/{chat_id}", headers=carol).status_code == 403
    assert client.patch(f"/api/chats/{chat_id}", json={"name": "x"}, headers=bob).status_code == 403
    assert client.patch("/api/chats/999", json={"name": "x"}, headers=bob).status_code == 404

    sent = client.post("/api/messages", json={"chat_id": chat_id, "content": "hi"}, headers=bob)
    assert sent.status_code == 201
    message_id = sent.get_json()["id"]

    assert (
        client.patch(f"/api/messages/{message_id}", json={"content": "x"}, headers=alice).status_code
        == 403
    )
    listed = client.get(f"/api/chats/{chat_id}/messages", headers=alice).get_json()
    assert [m["content"] for m in listed["items"]] == ["hi"]

    assert client.delete(f"/api/chats/{chat_id}", headers=bob).status_code == 403
    assert client.delete(f"/api/chats/{chat_id}", headers=alice).status_code == 204
    assert client.get(f"/api/messages/{message_id}", headers=bob).status_code == 404


def test_profile_changes_are_self_only(client: FlaskClient) -> None:
    alice_id, alice = _register(client, "alice")
    bob_id, _ = _register(client, "bob")

    forbidden = client.patch(f"/api/users/{bob_id}", json={"display_name": "x"}, headers=alice)
    assert forbidden.status_code == 403

    ok = client.patch(f"/api/users/{alice_id}", json={"display_name": "Alice"}, headers=alice)
    assert ok.get_json()["display_name"] == "Alice"

    assert client.post("/api/users/me/seen", headers=alice).status_code == 204
    assert client.delete(f"/api/users/{alice_id}", headers=alice).status_code == 204
