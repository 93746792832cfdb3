from datetime import timedelta

import pytest
from jose import jwt

from reader.core.config import get_settings
from reader.core.errors import InvalidToken
from reader.core.security import create_access_token, decode_access_token, hash_password, verify_password


def test_password_hash_is_salted_and_verifies():
    first = hash_password("pw")
    second = hash_password("pw")

    assert first != second
    assert first.startswith("$2b$")
    assert verify_password("pw", first)
    assert verify_password("pw", second)
    assert not verify_password("wrong", first)


def test_token_verifies_to_issuing_user():
    token = create_access_token(42)
    assert decode_access_token(token) == 42


def test_expired_token_is_rejected():
    token = create_access_token(42, expires_delta=timedelta(seconds=-1))
    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_tampered_token_is_rejected():
    token = create_access_token(42)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])
    with pytest.raises(InvalidToken):
        decode_access_token(tampered)


def test_token_signed_with_other_secret_is_rejected():
    settings = get_settings()
    forged = jwt.encode({"sub": "42", "type": "access"}, "not-the-secret", algorithm=settings.algorithm)
    with pytest.raises(InvalidToken):
        decode_access_token(forged)


def test_token_without_user_subject_is_rejected():
    settings = get_settings()
    token = jwt.encode({"sub": "alice", "type": "access"}, settings.secret_key, algorithm=settings.algorithm)
    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_garbage_is_rejected():
    with pytest.raises(InvalidToken):
        decode_access_token("not-a-token")


def test_token_claims():
    settings = get_settings()
    claims = jwt.decode(create_access_token(7), settings.secret_key, algorithms=[settings.algorithm])

    assert set(claims) == {"sub", "iat", "exp", "type"}
    assert claims["sub"] == "7"
    assert claims["exp"] - claims["iat"] == settings.access_token_expire_minutes * 60
