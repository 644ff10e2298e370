# tests/test_security.py
import pytest

from matchai.core.errors import AuthenticationError
from matchai.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_round_trip(test_password) -> None:
    hashed = hash_password(test_password)

    assert hashed.startswith("$argon2id$")
    assert verify_password(test_password, hashed) is True
    assert verify_password("wrong", hashed) is False


def test_verify_rejects_garbage_hash() -> None:
    assert verify_password("anything", "not-a-hash") is False


def test_token_subject_is_user_id() -> None:
    assert decode_access_token(create_access_token(42)) == 42


def test_tampered_token_rejected() -> None:
    token = create_access_token(42)
    with pytest.raises(AuthenticationError):
        decode_access_token(token[:-2] + ("aa" if not token.endswith("aa") else "bb"))
