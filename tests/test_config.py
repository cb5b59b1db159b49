import json
import logging

import pytest

from shelf.config import ServerSettings, Settings
from shelf.observability import JSONFormatter


def test_settings_require_secret(monkeypatch):
    monkeypatch.delenv("SHELF_SECRET_KEY", raising=False)
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(RuntimeError):
        Settings.from_env()


def test_settings_defaults_and_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("SHELF_SECRET_KEY", "k")
    monkeypatch.setenv("SHELF_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("SHELF_USERS_PATH", raising=False)
    monkeypatch.delenv("SHELF_TOKEN_TTL", raising=False)
    s = Settings.from_env()
    assert s.token_ttl_seconds == 3600
    assert s.root_admin_username == "admin"
    assert s.root_admin_password == "admin123"
    assert s.users_path == (tmp_path / "users.yml").resolve()

    monkeypatch.setenv("SHELF_TOKEN_TTL", "60")
    monkeypatch.setenv("SHELF_ROOT_ADMIN_USERNAME", "root")
    s = Settings.from_env()
    assert s.token_ttl_seconds == 60
    assert s.root_admin_username == "root"


def test_non_positive_ttl_is_rejected(monkeypatch):
    monkeypatch.setenv("SHELF_SECRET_KEY", "k")
    monkeypatch.setenv("SHELF_TOKEN_TTL", "0")
    with pytest.raises(RuntimeError):
        Settings.from_env()


def test_server_settings(monkeypatch):
    monkeypatch.setenv("SHELF_PORT", "9001")
    monkeypatch.setenv("SHELF_RELOAD", "yes")
    s = ServerSettings.from_env()
    assert (s.port, s.reload) == (9001, True)


def test_json_formatter_keeps_known_extras():
    record = logging.LogRecord("shelf.test", logging.INFO, __file__, 1, "Created user", None, None)
    record.user_id = 3
    record.password = "leak"
    out = json.loads(JSONFormatter().format(record))
    assert out["message"] == "Created user"
    assert out["user_id"] == 3
    assert "password" not in out


def test_json_formatter_uses_record_time():
    record = logging.LogRecord("shelf.test", logging.INFO, __file__, 1, "Created user", None, None)
    record.created = 0.0
    out = json.loads(JSONFormatter().format(record))
    assert out["timestamp"] == "1970-01-01T00:00:00+00:00"
