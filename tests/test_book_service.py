import pytest

from shelf.core.models import Identity
from shelf.errors import Forbidden, NotFound
from shelf.services import book_service


def _me(user):
    return Identity.from_user(user)


def test_create_sets_owner_from_identity(book_store, directory, alice):
    book = book_service.create_book(
        store=book_store, directory=directory, identity=_me(alice), title="Dune", text="spice"
    )
    assert book.owner_id == alice.id
    assert book_store.owner_of(book.id) == alice.id
    assert book_service.get_book(book_store, book.id) == book


def test_create_for_missing_user_is_not_found(book_store, directory):
    with pytest.raises(NotFound):
        book_service.create_book(
            store=book_store, directory=directory, identity=Identity(id=42, username="x", role="user"), title="Lost"
        )


def test_only_owner_can_update(book_store, directory, alice, bob):
    book = book_service.create_book(store=book_store, directory=directory, identity=_me(alice), title="Dune")

    with pytest.raises(Forbidden):
        book_service.update_book(store=book_store, identity=_me(bob), book_id=book.id, title="Mine now")
    assert book_store.get(book.id).title == "Dune"

    updated = book_service.update_book(store=book_store, identity=_me(alice), book_id=book.id, title="Dune II")
    assert updated.title == "Dune II"
    assert updated.owner_id == alice.id


def test_admin_cannot_update_others_books(book_store, directory, alice):
    book = book_service.create_book(store=book_store, directory=directory, identity=_me(alice), title="Dune")
    root = Identity(id=alice.id + 50, username="admin", role="admin")
    with pytest.raises(Forbidden):
        book_service.update_book(store=book_store, identity=root, book_id=book.id, title="x")


def test_only_owner_can_delete(book_store, directory, alice, bob):
    book = book_service.create_book(store=book_store, directory=directory, identity=_me(alice), title="Dune")

    with pytest.raises(Forbidden):
        book_service.delete_book(store=book_store, identity=_me(bob), book_id=book.id)

    book_service.delete_book(store=book_store, identity=_me(alice), book_id=book.id)
    assert book_service.list_books(book_store) == []
    with pytest.raises(NotFound):
        book_service.get_book(book_store, book.id)


def test_missing_book_is_not_found(book_store, alice):
    with pytest.raises(NotFound):
        book_service.update_book(store=book_store, identity=_me(alice), book_id=9, title="x")
    with pytest.raises(NotFound):
        book_service.delete_book(store=book_store, identity=_me(alice), book_id=9)
