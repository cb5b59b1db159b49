# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Signed bearer tokens.

A token is an itsdangerous ``URLSafeTimedSerializer`` dump of the claim set
``{id, username, role, iat, exp}``. There is no server-side record: a token
stops working when it expires or when its subject disappears from the
directory.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from itsdangerous import BadData, URLSafeTimedSerializer
from itsdangerous.encoding import base64_decode, base64_encode

from shelf.auth.users import UserDirectory
from shelf.config import DEFAULT_TOKEN_SALT, DEFAULT_TOKEN_TTL_SECONDS
from shelf.core.models import Identity
from shelf.errors import Unauthorized

logger = logging.getLogger(__name__)


def _reject(reason: str) -> Unauthorized:
    logger.debug("Token rejected", extra={"reason": reason})
    return Unauthorized()


def _canonical_signature(token: str) -> bool:
    # The last base64 character can carry unused bits, so several spellings
    # decode to the same signature. Only the one we would emit is accepted.
    sig = token.rpartition(".")[2].encode("ascii")
    return base64_encode(base64_decode(sig)) == sig


class TokenService:
    def __init__(
        self,
        secret_key: str,
        *,
        lifetime_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        salt: str = DEFAULT_TOKEN_SALT,
    ) -> None:
        if not secret_key:
            raise ValueError("Empty signing secret")
        if lifetime_seconds <= 0:
            raise ValueError("Token lifetime must be positive")
        self.lifetime_seconds = lifetime_seconds
        self._serializer = URLSafeTimedSerializer(secret_key=secret_key, salt=salt)

    def issue(self, identity: Identity, *, now: Optional[float] = None) -> str:
        iat = int(time.time() if now is None else now)
        claims = {
            "id": identity.id,
            "username": identity.username,
            "role": identity.role,
            "iat": iat,
            "exp": iat + self.lifetime_seconds,
        }
        return self._serializer.dumps(claims)

    def decode(self, token: str, *, now: Optional[float] = None) -> Dict[str, Any]:
        """Verify signature, structure and expiry; return the claims."""
        if not token:
            raise _reject("empty")
        try:
            # max_age guards against payloads re-signed long ago with an oversized exp.
            claims = self._serializer.loads(token, max_age=self.lifetime_seconds)
        except BadData:
            raise _reject("signature") from None
        if not _canonical_signature(token):
            raise _reject("signature")

        if not isinstance(claims, dict):
            raise _reject("structure")
        uid = claims.get("id")
        exp = claims.get("exp")
        if isinstance(uid, bool) or not isinstance(uid, int):
            raise _reject("structure")
        if isinstance(exp, bool) or not isinstance(exp, int):
            raise _reject("structure")

        current = time.time() if now is None else now
        if exp <= current:
            raise _reject("expired")
        return claims

    def validate(self, token: str, directory: UserDirectory, *, now: Optional[float] = None) -> Identity:
        """Return the identity behind ``token``, re-resolved against the directory.

        Username and role come from the directory, not from the claims.
        """
        claims = self.decode(token, now=now)
        u = directory.find_by_id(claims["id"])
        if u is None:
            raise _reject("unknown subject")
        return Identity.from_user(u)
