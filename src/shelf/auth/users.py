# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from typing import Optional, Protocol

from shelf.auth.passwords import hash_password, verify_password
from shelf.core.models import Identity, UserRecord
from shelf.errors import Unauthorized

logger = logging.getLogger(__name__)

# Verified against when the username is unknown, so both failure paths cost one hash.
_DUMMY_HASH = hash_password("shelf-dummy-password")


class UserDirectory(Protocol):
    def find_by_username(self, username: str, include_secret: bool = False) -> Optional[UserRecord]: ...

    def find_by_id(self, user_id: int) -> Optional[UserRecord]: ...

    def create(self, username: str, password_hash: str, role: str = "user") -> UserRecord: ...


def authenticate(directory: UserDirectory, username: str, password: str) -> Identity:
    """Check a username/password pair.

    Unknown user and wrong password raise the same ``Unauthorized``.
    """
    u = directory.find_by_username(username, include_secret=True)
    if u is None:
        verify_password(_DUMMY_HASH, password)
        logger.info("Sign-in rejected", extra={"username": username})
        raise Unauthorized()
    if not verify_password(u.password_hash, password):
        logger.info("Sign-in rejected", extra={"username": username})
        raise Unauthorized()
    return Identity.from_user(u)
