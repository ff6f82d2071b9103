import uuid
from datetime import timedelta

import pytest

from app.core import messages
from app.core.errors import Unauthenticated
from app.core.security import (
    create_token,
    get_password_hash,
    issue_token,
    verify_password,
    verify_token,
)


def test_issued_token_resolves_to_user_id():
    user_id = uuid.uuid4()
    assert verify_token(issue_token(user_id)) == user_id


def test_missing_token_is_rejected():
    with pytest.raises(Unauthenticated) as exc:
        verify_token(None)
    assert exc.value.message == messages.AUTH_TOKEN_MISSING


@pytest.mark.parametrize("token", ["garbage", "a.b.c"])
def test_malformed_token_is_rejected(token):
    with pytest.raises(Unauthenticated) as exc:
        verify_token(token)
    assert exc.value.message == messages.AUTH_TOKEN_INVALID


def test_expired_token_is_rejected():
    token = create_token(uuid.uuid4(), timedelta(seconds=-1), token_type="access")
    with pytest.raises(Unauthenticated):
        verify_token(token)


def test_token_of_other_type_is_rejected():
    token = create_token(uuid.uuid4(), timedelta(days=1), token_type="refresh")
    with pytest.raises(Unauthenticated):
        verify_token(token)


def test_token_with_non_uuid_subject_is_rejected():
    token = create_token("not-a-uuid", timedelta(days=1), token_type="access")
    with pytest.raises(Unauthenticated):
        verify_token(token)


def test_tampered_token_is_rejected():
    token = issue_token(uuid.uuid4())
    header, payload, signature = token.split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
    with pytest.raises(Unauthenticated):
        verify_token(".".join([header, payload, flipped]))


def test_password_hash_round_trip():
    hashed = get_password_hash("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_malformed_stored_hash_does_not_verify():
    assert not verify_password("secret1", "not-a-bcrypt-hash")


def test_secret_over_72_bytes_never_verifies():
    hashed = get_password_hash("a" * 72)

    assert verify_password("a" * 72, hashed)
    assert not verify_password("a" * 72 + "b", hashed)


def test_hashing_secret_over_72_bytes_is_refused():
    # Multi-byte characters count by encoded length
    with pytest.raises(ValueError):
        get_password_hash("あ" * 25)
