# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging

from shelf.auth.passwords import hash_password
from shelf.auth.tokens import TokenService
from shelf.auth.users import UserDirectory, authenticate
from shelf.core.models import ROLE_USER, Identity, UserRecord

logger = logging.getLogger(__name__)


def sign_up(*, directory: UserDirectory, username: str, password: str) -> UserRecord:
    """Register a regular user. The returned record never carries the hash.

    Raises ``Conflict`` if the username is taken.
    """
    user = directory.create(username, hash_password(password), role=ROLE_USER)
    logger.info("User signed up", extra={"user_id": user.id, "username": user.username})
    return user.without_secret()


def sign_in(*, directory: UserDirectory, tokens: TokenService, username: str, password: str) -> str:
    identity = authenticate(directory, username, password)
    return tokens.issue(identity)


def profile(identity: Identity) -> dict:
    return identity.public()
