import os
import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

# shelf.app builds its FastAPI instance at import time; settings are only read at startup.
os.environ.setdefault("SHELF_SECRET_KEY", "test-secret")

from pathlib import Path

import pytest

from shelf.auth.passwords import hash_password
from shelf.auth.tokens import TokenService
from shelf.config import Settings
from shelf.infra.book_repo import YamlBookStore
from shelf.infra.user_repo import YamlUserDirectory


@pytest.fixture()
def users_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "users.yml"


@pytest.fixture()
def directory(users_path: Path) -> YamlUserDirectory:
    return YamlUserDirectory(users_path)


@pytest.fixture()
def book_store(tmp_path: Path) -> YamlBookStore:
    return YamlBookStore(tmp_path / "data" / "books.yml")


@pytest.fixture()
def tokens() -> TokenService:
    return TokenService("unit-test-secret", lifetime_seconds=3600)


@pytest.fixture()
def alice(directory):
    """A regular user 'alice' with password 'pw1234'."""
    return directory.create("alice", hash_password("pw1234"), role="user")


@pytest.fixture()
def bob(directory):
    return directory.create("bob", hash_password("hunter22"), role="user")


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    data_dir = tmp_path / "data"
    return Settings(
        secret_key="app-test-secret",
        users_path=data_dir / "users.yml",
        books_path=data_dir / "books.yml",
    )
