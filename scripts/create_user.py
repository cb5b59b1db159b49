#!/usr/bin/env python3
from __future__ import annotations

from getpass import getpass

from shelf.auth.passwords import hash_password
from shelf.config import Settings
from shelf.errors import Conflict
from shelf.infra.user_repo import YamlUserDirectory


def main() -> None:
    settings = Settings.from_env()
    directory = YamlUserDirectory(settings.users_path)

    username = input("Username: ").strip()
    role = (input("Role [user/admin]: ").strip().lower() or "user")

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    try:
        user = directory.create(username, hash_password(pw1), role=role)
    except (Conflict, ValueError) as e:
        raise SystemExit(str(e))
    print(f"OK -> {settings.users_path} (id={user.id})")


if __name__ == "__main__":
    main()
