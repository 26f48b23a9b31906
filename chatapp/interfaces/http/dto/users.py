# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PageQueryDTO(BaseModel):
    limit: int = Field(50, ge=1, le=200)
    offset: int = Field(0, ge=0)


class UpdateUserRequestDTO(BaseModel):
    display_name: str | None = Field(default=None, min_length=1, max_length=128)
    password: str | None = Field(default=None, min_length=6, max_length=128)


class UserProfileDTO(BaseModel):
    id: int
    username: str
    display_name: str
    created_at: datetime
    last_seen: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
