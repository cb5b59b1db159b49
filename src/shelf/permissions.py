# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from enum import Enum

from shelf.auth.tokens import TokenService
from shelf.auth.users import UserDirectory
from shelf.core.models import Identity
from shelf.errors import Forbidden, Unauthorized

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer"


class Decision(str, Enum):
    ALLOW = "allow"
    FORBIDDEN = "forbidden"


def authorize(identity: Identity, owner_id: int) -> Decision:
    # Ownership only: the admin role gets no override here.
    if identity.id == owner_id:
        return Decision.ALLOW
    return Decision.FORBIDDEN


def require_owner(identity: Identity, owner_id: int, message: str = "Forbidden") -> None:
    if authorize(identity, owner_id) is Decision.FORBIDDEN:
        logger.info("Mutation forbidden", extra={"user_id": identity.id, "reason": message})
        raise Forbidden(message)


def bearer_token(authorization: str) -> str:
    """Extract the raw token from an ``Authorization: Bearer <token>`` value."""
    scheme, _, token = (authorization or "").strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_PREFIX or not token:
        raise Unauthorized()
    return token


def identity_from_header(authorization: str, tokens: TokenService, directory: UserDirectory) -> Identity:
    return tokens.validate(bearer_token(authorization), directory)
