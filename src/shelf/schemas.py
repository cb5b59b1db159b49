# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request bodies accepted by the API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class CredentialsIn(BaseModel):
    username: str = Field(min_length=1, max_length=20)
    password: str = Field(min_length=4, max_length=128)


class BookIn(BaseModel):
    title: str = Field(min_length=4)
    text: str = ""


class BookUpdateIn(BaseModel):
    """Partial update: fields left out keep their stored value."""

    title: Optional[str] = Field(default=None, min_length=4)
    text: Optional[str] = None
