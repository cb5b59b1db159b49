# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""argon2id password hashing.

Length and content rules for passwords live in the request schemas; the
hasher accepts any string, including the empty one.
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError

_PH = PasswordHasher()


def hash_password(plain: str) -> str:
    return _PH.hash(plain)


def verify_password(hash_value: str, plain: str) -> bool:
    """True iff ``plain`` matches ``hash_value``. Never raises on a bad hash."""
    if not hash_value:
        return False
    try:
        return _PH.verify(hash_value, plain)
    # InvalidHashError and the UnicodeEncodeError of a non-ASCII hash are both ValueErrors.
    except (VerificationError, ValueError):
        return False
