# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""User directory backed by ``users.yml``.

File layout::

    version: 1
    next_id: 3
    users:
      alice:
        id: 1
        role: user
        password_hash: $argon2id$...

Usernames are the mapping keys, so they are unique and case-sensitive.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from shelf.core.models import UserRecord, normalize_role
from shelf.errors import Conflict
from shelf.infra.yaml_store import read_yaml, write_yaml_atomic

logger = logging.getLogger(__name__)

FILE_VERSION = 1


def _parse_users(raw: dict) -> Dict[str, UserRecord]:
    users = raw.get("users") or {}
    out: Dict[str, UserRecord] = {}
    if not isinstance(users, dict):
        return out
    for uname, udata in users.items():
        if not isinstance(udata, dict):
            continue
        username = str(uname)
        if not username.strip():
            continue
        try:
            uid = int(udata.get("id"))
        except (TypeError, ValueError):
            logger.warning("Skipping user without a valid id", extra={"username": username})
            continue
        out[username] = UserRecord(
            id=uid,
            username=username,
            role=str(udata.get("role") or "user").strip().lower(),
            password_hash=str(udata.get("password_hash") or "").strip(),
        )
    return out


class YamlUserDirectory:
    """Thread-safe user directory.

    Reads are cached against the file's mtime; every write goes through one
    lock, which is what makes ``create`` enforce username uniqueness.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._cache: Tuple[int, Dict[str, UserRecord]] = (-1, {})

    def _mtime(self) -> int:
        try:
            return self.path.stat().st_mtime_ns
        except FileNotFoundError:
            return 0

    def _load(self) -> Dict[str, UserRecord]:
        mtime = self._mtime()
        cached_mtime, cached_users = self._cache
        if mtime == cached_mtime:
            return cached_users
        users = _parse_users(read_yaml(self.path))
        self._cache = (mtime, users)
        return users

    def _users(self) -> Dict[str, UserRecord]:
        with self._lock:
            return self._load()

    def find_by_username(self, username: str, include_secret: bool = False) -> Optional[UserRecord]:
        if not username:
            return None
        u = self._users().get(username)
        if u is None:
            return None
        return u if include_secret else u.without_secret()

    def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        for u in self._users().values():
            if u.id == user_id:
                return u.without_secret()
        return None

    def list_users(self) -> List[UserRecord]:
        return sorted((u.without_secret() for u in self._users().values()), key=lambda u: u.id)

    def create(self, username: str, password_hash: str, role: str = "user") -> UserRecord:
        """Persist a new user. Raises ``Conflict`` if the username is taken."""
        if not username or not username.strip():
            raise ValueError("Empty username")
        if not password_hash:
            raise ValueError("Missing password hash")
        role = normalize_role(role)

        with self._lock:
            raw = read_yaml(self.path)
            users = raw.get("users")
            if not isinstance(users, dict):
                users = {}
            if username in users:
                raise Conflict("Username already exists")

            existing_ids = [int(u.get("id") or 0) for u in users.values() if isinstance(u, dict)]
            next_id = max([int(raw.get("next_id") or 1), *[i + 1 for i in existing_ids]])

            users[username] = {"id": next_id, "role": role, "password_hash": password_hash}
            write_yaml_atomic(
                self.path,
                {"version": raw.get("version", FILE_VERSION), "next_id": next_id + 1, "users": users},
            )
            # Force a reload on next read.
            self._cache = (-1, {})

        logger.info("Created user", extra={"user_id": next_id, "username": username})
        return UserRecord(id=next_id, username=username, role=role)
