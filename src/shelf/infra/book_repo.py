# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Book store backed by ``books.yml``.

The store knows nothing about permissions; callers look up ``owner_of`` and
run the ownership check before calling ``update`` or ``delete``.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from shelf.core.models import BookRecord
from shelf.errors import NotFound
from shelf.infra.yaml_store import read_yaml, write_yaml_atomic

FILE_VERSION = 1


def _to_book(data: Dict[str, Any]) -> BookRecord:
    return BookRecord(
        id=int(data["id"]),
        title=str(data.get("title") or ""),
        text=str(data.get("text") or ""),
        owner_id=int(data["owner_id"]),
        readers=tuple(int(r) for r in (data.get("readers") or [])),
    )


def _to_row(book: BookRecord) -> Dict[str, Any]:
    return {
        "id": book.id,
        "title": book.title,
        "text": book.text,
        "owner_id": book.owner_id,
        "readers": list(book.readers),
    }


class YamlBookStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, Any]:
        raw = read_yaml(self.path)
        if not isinstance(raw.get("books"), list):
            raw["books"] = []
        return raw

    def _write(self, raw: Dict[str, Any]) -> None:
        raw.setdefault("version", FILE_VERSION)
        write_yaml_atomic(self.path, raw)

    def list_all(self) -> List[BookRecord]:
        with self._lock:
            rows = self._read()["books"]
        return [_to_book(r) for r in rows if isinstance(r, dict)]

    def find(self, book_id: int) -> Optional[BookRecord]:
        for b in self.list_all():
            if b.id == book_id:
                return b
        return None

    def get(self, book_id: int) -> BookRecord:
        b = self.find(book_id)
        if b is None:
            raise NotFound(f"Book with ID {book_id} not found")
        return b

    def owner_of(self, book_id: int) -> int:
        return self.get(book_id).owner_id

    def add(self, *, title: str, text: str, owner_id: int) -> BookRecord:
        with self._lock:
            raw = self._read()
            existing = [int(r.get("id") or 0) for r in raw["books"] if isinstance(r, dict)]
            next_id = max([int(raw.get("next_id") or 1), *[i + 1 for i in existing]])
            book = BookRecord(id=next_id, title=title, text=text, owner_id=owner_id)
            raw["books"].append(_to_row(book))
            raw["next_id"] = next_id + 1
            self._write(raw)
        return book

    def update(self, book_id: int, *, title: Optional[str] = None, text: Optional[str] = None) -> BookRecord:
        """Update content fields. ``owner_id`` is never rewritten."""
        with self._lock:
            raw = self._read()
            for row in raw["books"]:
                if isinstance(row, dict) and int(row.get("id") or 0) == book_id:
                    if title is not None:
                        row["title"] = title
                    if text is not None:
                        row["text"] = text
                    self._write(raw)
                    return _to_book(row)
        raise NotFound(f"Book with ID {book_id} not found")

    def delete(self, book_id: int) -> None:
        with self._lock:
            raw = self._read()
            kept = [r for r in raw["books"] if not (isinstance(r, dict) and int(r.get("id") or 0) == book_id)]
            if len(kept) == len(raw["books"]):
                raise NotFound(f"Book with ID {book_id} not found")
            raw["books"] = kept
            self._write(raw)
