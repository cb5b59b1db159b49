# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Book use cases.

Every mutating call takes the caller's identity explicitly and checks
ownership against the stored ``owner_id`` before writing.
"""

from __future__ import annotations

from typing import List, Optional

from shelf.auth.users import UserDirectory
from shelf.core.models import BookRecord, Identity
from shelf.errors import NotFound
from shelf.infra.book_repo import YamlBookStore
from shelf.permissions import require_owner


def list_books(store: YamlBookStore) -> List[BookRecord]:
    return store.list_all()


def get_book(store: YamlBookStore, book_id: int) -> BookRecord:
    return store.get(book_id)


def create_book(
    *,
    store: YamlBookStore,
    directory: UserDirectory,
    identity: Identity,
    title: str,
    text: str = "",
) -> BookRecord:
    if directory.find_by_id(identity.id) is None:
        raise NotFound(f"User with ID {identity.id} not found")
    return store.add(title=title, text=text, owner_id=identity.id)


def update_book(
    *,
    store: YamlBookStore,
    identity: Identity,
    book_id: int,
    title: Optional[str] = None,
    text: Optional[str] = None,
) -> BookRecord:
    require_owner(identity, store.owner_of(book_id), "You do not have permission to edit this book")
    return store.update(book_id, title=title, text=text)


def delete_book(*, store: YamlBookStore, identity: Identity, book_id: int) -> None:
    require_owner(identity, store.owner_of(book_id), "You do not have permission to delete this book")
    store.delete(book_id)
