# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Anchor default data paths to the project root, not the current working directory.
BASE_DIR = Path(__file__).resolve().parents[2]

DEFAULT_TOKEN_TTL_SECONDS = 3600  # 1 hour
DEFAULT_TOKEN_SALT = "shelf.token.v1"
DEFAULT_ROOT_ADMIN_USERNAME = "admin"
DEFAULT_ROOT_ADMIN_PASSWORD = "admin123"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "y"}


@dataclass(frozen=True)
class Settings:
    secret_key: str
    token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS
    token_salt: str = DEFAULT_TOKEN_SALT
    root_admin_username: str = DEFAULT_ROOT_ADMIN_USERNAME
    root_admin_password: str = DEFAULT_ROOT_ADMIN_PASSWORD
    users_path: Path = BASE_DIR / "data" / "users.yml"
    books_path: Path = BASE_DIR / "data" / "books.yml"
    log_level: str = "INFO"
    log_format: str = "text"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings once from the environment.

        The signing secret is mandatory; everything else has a default.
        """
        secret = os.getenv("SHELF_SECRET_KEY") or os.getenv("SECRET_KEY")
        if not secret:
            raise RuntimeError("Missing SHELF_SECRET_KEY (or SECRET_KEY) in environment")

        ttl = int(os.getenv("SHELF_TOKEN_TTL", str(DEFAULT_TOKEN_TTL_SECONDS)))
        if ttl <= 0:
            raise RuntimeError("SHELF_TOKEN_TTL must be a positive number of seconds")

        data_dir = Path(os.getenv("SHELF_DATA_DIR", str(BASE_DIR / "data"))).resolve()
        users_path = Path(os.getenv("SHELF_USERS_PATH", str(data_dir / "users.yml"))).resolve()
        books_path = Path(os.getenv("SHELF_BOOKS_PATH", str(data_dir / "books.yml"))).resolve()

        return cls(
            secret_key=secret,
            token_ttl_seconds=ttl,
            token_salt=os.getenv("SHELF_TOKEN_SALT", DEFAULT_TOKEN_SALT),
            root_admin_username=os.getenv("SHELF_ROOT_ADMIN_USERNAME", DEFAULT_ROOT_ADMIN_USERNAME),
            root_admin_password=os.getenv("SHELF_ROOT_ADMIN_PASSWORD", DEFAULT_ROOT_ADMIN_PASSWORD),
            users_path=users_path,
            books_path=books_path,
            log_level=os.getenv("SHELF_LOG_LEVEL", "INFO"),
            log_format=os.getenv("SHELF_LOG_FORMAT", "text"),
        )


@dataclass(frozen=True)
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    @classmethod
    def from_env(cls) -> "ServerSettings":
        return cls(
            host=os.getenv("SHELF_HOST", "0.0.0.0"),
            port=int(os.getenv("SHELF_PORT", "8000")),
            reload=_env_flag("SHELF_RELOAD"),
        )
