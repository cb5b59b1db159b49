# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy shared by the auth core, the stores and the HTTP layer.

Every error carries a stable ``code`` and the HTTP status the API maps it to.
Messages are safe to show to clients: credential and token failures all use
the same text so callers cannot tell which check failed.
"""

from __future__ import annotations

from typing import Any, Dict

INVALID_CREDENTIALS = "Invalid credentials"


class ShelfError(Exception):
    code = "ERROR"
    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> Dict[str, Any]:
        return {"message": self.message, "success": False, "code": self.code}


class Unauthorized(ShelfError):
    """Bad credentials, or a token that is invalid, expired or tampered with."""

    code = "UNAUTHORIZED"
    http_status = 401

    def __init__(self, message: str = INVALID_CREDENTIALS) -> None:
        super().__init__(message)


class Forbidden(ShelfError):
    """Authenticated, but not allowed to touch the resource."""

    code = "FORBIDDEN"
    http_status = 403


class NotFound(ShelfError):
    code = "NOT_FOUND"
    http_status = 404


class Conflict(ShelfError):
    code = "CONFLICT"
    http_status = 409
