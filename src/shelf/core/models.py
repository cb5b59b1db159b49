# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Plain records passed between the stores, the auth core and the HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


def normalize_role(role: str) -> str:
    r = (role or ROLE_USER).strip().lower()
    if r not in ROLES:
        raise ValueError(f"Unknown role '{role}' (expected one of: {', '.join(ROLES)})")
    return r


@dataclass(frozen=True)
class UserRecord:
    id: int
    username: str
    role: str
    # Empty unless the directory was asked for the secret.
    password_hash: str = field(default="", repr=False)

    def without_secret(self) -> "UserRecord":
        return replace(self, password_hash="")

    def public(self) -> Dict[str, Any]:
        return {"id": self.id, "username": self.username, "role": self.role}


@dataclass(frozen=True)
class Identity:
    """Authenticated principal. Never carries secret material."""

    id: int
    username: str
    role: str

    @classmethod
    def from_user(cls, user: UserRecord) -> "Identity":
        return cls(id=user.id, username=user.username, role=user.role)

    def public(self) -> Dict[str, Any]:
        return {"id": self.id, "username": self.username, "role": self.role}


@dataclass(frozen=True)
class BookRecord:
    id: int
    title: str
    text: str
    owner_id: int
    readers: Tuple[int, ...] = ()

    def public(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "text": self.text,
            "ownerId": self.owner_id,
            "readers": list(self.readers),
        }
