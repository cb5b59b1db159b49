import pytest

from shelf.core.models import Identity
from shelf.errors import Forbidden, Unauthorized
from shelf.permissions import Decision, authorize, bearer_token, identity_from_header, require_owner


def test_owner_is_allowed():
    me = Identity(id=7, username="alice", role="user")
    assert authorize(me, 7) is Decision.ALLOW
    require_owner(me, 7)


@pytest.mark.parametrize("owner_id", [0, 6, 8, -7, 700])
def test_non_owner_is_forbidden(owner_id):
    me = Identity(id=7, username="alice", role="user")
    assert authorize(me, owner_id) is Decision.FORBIDDEN
    with pytest.raises(Forbidden):
        require_owner(me, owner_id)


def test_admin_gets_no_override():
    root = Identity(id=1, username="admin", role="admin")
    assert authorize(root, 2) is Decision.FORBIDDEN


def test_require_owner_uses_given_message():
    with pytest.raises(Forbidden) as exc:
        require_owner(Identity(id=1, username="a", role="user"), 2, "You do not have permission to edit this book")
    assert exc.value.message == "You do not have permission to edit this book"
    assert exc.value.http_status == 403


def test_bearer_token_parsing():
    assert bearer_token("Bearer abc.def") == "abc.def"
    assert bearer_token("bearer   abc") == "abc"
    for bad in ("", "Bearer", "Bearer ", "Basic abc", "abc"):
        with pytest.raises(Unauthorized):
            bearer_token(bad)


def test_identity_from_header(tokens, directory, alice):
    token = tokens.issue(Identity.from_user(alice))
    ident = identity_from_header(f"Bearer {token}", tokens, directory)
    assert ident.id == alice.id
    with pytest.raises(Unauthorized):
        identity_from_header(token, tokens, directory)
