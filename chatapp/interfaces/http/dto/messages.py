# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SendMessageRequestDTO(BaseModel):
    chat_id: int
    content: str = Field(min_length=1, max_length=4096)


class EditMessageRequestDTO(BaseModel):
    content: str = Field(min_length=1, max_length=4096)


class MessageDTO(BaseModel):
    id: int
    chat_id: int
    sender_id: int
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
