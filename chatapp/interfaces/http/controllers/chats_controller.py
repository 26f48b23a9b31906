# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from chatapp.application.use_cases.chats.create_chat import CreateChatUseCase
from chatapp.application.use_cases.chats.manage_chat import (
    AddMembersUseCase,
    DeleteChatUseCase,
    GetChatUseCase,
    ListChatsUseCase,
    RemoveMemberUseCase,
    RenameChatUseCase,
)
from chatapp.infrastructure.auth import auth_required, authed_request
from chatapp.interfaces.http.controllers.common import parse_json, parse_query
from chatapp.interfaces.http.dto.chats import (
    AddMembersRequestDTO,
    ChatCreatedDTO,
    ChatDTO,
    CreateChatRequestDTO,
    RenameChatRequestDTO,
)
from chatapp.interfaces.http.dto.users import PageQueryDTO


def _chat(chat) -> dict[str, object]:
    return ChatDTO.model_validate(chat).model_dump(mode="json")


class ChatsController:
    def __init__(
        self,
        *,
        create_chat: CreateChatUseCase,
        get_chat: GetChatUseCase,
        list_chats: ListChatsUseCase,
        rename_chat: RenameChatUseCase,
        delete_chat: DeleteChatUseCase,
        add_members: AddMembersUseCase,
        remove_member: RemoveMemberUseCase,
    ) -> None:
        self._create_chat = create_chat
        self._get_chat = get_chat
        self._list_chats = list_chats
        self._rename_chat = rename_chat
        self._delete_chat = delete_chat
        self._add_members = add_members
        self._remove_member = remove_member

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("chats", __name__, url_prefix="/api")
        bp.add_url_rule("/chats", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/chats", view_func=self.list_chats, methods=["GET"])
        bp.add_url_rule("/chats/<int:chat_id>", view_func=self.get_chat, methods=["GET"])
        bp.add_url_rule("/chats/<int:chat_id>", view_func=self.rename, methods=["PATCH"])
        bp.add_url_rule("/chats/<int:chat_id>", view_func=self.delete, methods=["DELETE"])
        bp.add_url_rule(
            "/chats/<int:chat_id>/members",
            view_func=self.add_members,
            methods=["POST"],
        )
        bp.add_url_rule(
            "/chats/<int:chat_id>/members/<int:member_id>",
            view_func=self.remove_member,
            methods=["DELETE"],
        )
        return bp

    @auth_required
    def create(self) -> tuple[Response, int]:
        dto = parse_json(CreateChatRequestDTO)
        result = self._create_chat.execute(
            dto.name, dto.is_group, authed_request().user_id, dto.member_ids
        )
        body = ChatCreatedDTO(
            chat=ChatDTO.model_validate(result.chat),
            added_member_ids=list(result.added_member_ids),
            skipped_member_ids=list(result.skipped_member_ids),
        )
        return jsonify(body.model_dump(mode="json")), 201

    @auth_required
    def list_chats(self) -> Response:
        page = parse_query(PageQueryDTO)
        chats = self._list_chats.execute(
            authed_request().user_id, page.limit, page.offset, with_members=True
        )
        return jsonify({"items": [_chat(c) for c in chats]})

    @auth_required
    def get_chat(self, chat_id: int) -> Response:
        return jsonify(_chat(self._get_chat.execute(authed_request().user_id, chat_id)))

    @auth_required
    def rename(self, chat_id: int) -> Response:
        dto = parse_json(RenameChatRequestDTO)
        chat = self._rename_chat.execute(authed_request().user_id, chat_id, dto.name)
        return jsonify(_chat(chat))

    @auth_required
    def delete(self, chat_id: int) -> tuple[str, int]:
        self._delete_chat.execute(authed_request().user_id, chat_id)
        return "", 204

    @auth_required
    def add_members(self, chat_id: int) -> Response:
        dto = parse_json(AddMembersRequestDTO)
        added = self._add_members.execute(authed_request().user_id, chat_id, dto.member_ids)
        return jsonify({"added_member_ids": added})

    @auth_required
    def remove_member(self, chat_id: int, member_id: int) -> tuple[str, int]:
        self._remove_member.execute(authed_request().user_id, chat_id, member_id)
        return "", 204
