# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateChatRequestDTO(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    is_group: bool = False
    member_ids: list[int] = Field(min_length=1)


class RenameChatRequestDTO(BaseModel):
    name: str = Field(min_length=1, max_length=128)


class AddMembersRequestDTO(BaseModel):
    member_ids: list[int] = Field(min_length=1)


class ChatMemberDTO(BaseModel):
    user_id: int
    username: str | None = None
    is_admin: bool
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ChatDTO(BaseModel):
    id: int
    name: str
    is_group: bool
    creator_id: int
    created_at: datetime
    updated_at: datetime
    members: list[ChatMemberDTO] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class ChatCreatedDTO(BaseModel):
    chat: ChatDTO
    added_member_ids: list[int]
    skipped_member_ids: list[int]
