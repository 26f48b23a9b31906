# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from chatapp.application.use_cases.messages.messages import (
    DeleteMessageUseCase,
    EditMessageUseCase,
    GetMessageUseCase,
    ListMessagesUseCase,
    SendMessageUseCase,
)
from chatapp.infrastructure.auth import auth_required, authed_request
from chatapp.interfaces.http.controllers.common import parse_json, parse_query
from chatapp.interfaces.http.dto.messages import (
    EditMessageRequestDTO,
    MessageDTO,
    SendMessageRequestDTO,
)
from chatapp.interfaces.http.dto.users import PageQueryDTO


def _message(message) -> dict[str, object]:
    return MessageDTO.model_validate(message).model_dump(mode="json")


class MessagesController:
    def __init__(
        self,
        *,
        send_message: SendMessageUseCase,
        get_message: GetMessageUseCase,
        list_messages: ListMessagesUseCase,
        edit_message: EditMessageUseCase,
        delete_message: DeleteMessageUseCase,
    ) -> None:
        self._send_message = send_message
        self._get_message = get_message
        self._list_messages = list_messages
        self._edit_message = edit_message
        self._delete_message = delete_message

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("messages", __name__, url_prefix="/api")
        bp.add_url_rule("/messages", view_func=self.send, methods=["POST"])
        bp.add_url_rule(
            "/chats/<int:chat_id>/messages",
            view_func=self.list_messages,
            methods=["GET"],
        )
        bp.add_url_rule("/messages/<int:message_id>", view_func=self.get_message, methods=["GET"])
        bp.add_url_rule("/messages/<int:message_id>", view_func=self.edit, methods=["PATCH"])
        bp.add_url_rule("/messages/<int:message_id>", view_func=self.delete, methods=["DELETE"])
        return bp

    @auth_required
    def send(self) -> tuple[Response, int]:
        dto = parse_json(SendMessageRequestDTO)
        message = self._send_message.execute(authed_request().user_id, dto.chat_id, dto.content)
        return jsonify(_message(message)), 201

    @auth_required
    def list_messages(self, chat_id: int) -> Response:
        page = parse_query(PageQueryDTO)
        messages = self._list_messages.execute(
            authed_request().user_id, chat_id, page.limit, page.offset
        )
        return jsonify({"items": [_message(m) for m in messages]})

    @auth_required
    def get_message(self, message_id: int) -> Response:
        return jsonify(_message(self._get_message.execute(authed_request().user_id, message_id)))

    @auth_required
    def edit(self, message_id: int) -> Response:
        dto = parse_json(EditMessageRequestDTO)
        message = self._edit_message.execute(authed_request().user_id, message_id, dto.content)
        return jsonify(_message(message))

    @auth_required
    def delete(self, message_id: int) -> tuple[str, int]:
        self._delete_message.execute(authed_request().user_id, message_id)
        return "", 204
