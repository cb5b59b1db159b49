# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Root admin bootstrap, run once at process start.

Idempotent rather than locked: a lost race against another process shows up
as a ``Conflict`` from the directory and is treated as "already exists".
"""

from __future__ import annotations

import logging

from shelf.auth.passwords import hash_password
from shelf.auth.users import UserDirectory
from shelf.config import DEFAULT_ROOT_ADMIN_PASSWORD, DEFAULT_ROOT_ADMIN_USERNAME
from shelf.core.models import ROLE_ADMIN
from shelf.errors import Conflict

logger = logging.getLogger(__name__)


def ensure_root_admin(
    directory: UserDirectory,
    *,
    username: str = DEFAULT_ROOT_ADMIN_USERNAME,
    password: str = DEFAULT_ROOT_ADMIN_PASSWORD,
) -> bool:
    """Make sure the reserved admin account exists. Returns True if this call created it."""
    if directory.find_by_username(username) is not None:
        return False
    try:
        directory.create(username, hash_password(password), role=ROLE_ADMIN)
    except Conflict:
        logger.info("Root admin created concurrently", extra={"username": username})
        return False
    logger.info("Root admin created", extra={"username": username})
    return True
