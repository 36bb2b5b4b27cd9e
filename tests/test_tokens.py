from datetime import datetime, timedelta, timezone

import jwt
import pytest

from utils.tokens import AccessTokenCodec

SECRET = "test-secret"


@pytest.fixture
def codec():
    return AccessTokenCodec(SECRET, 3600)


def test_issue_then_verify_returns_claims(codec):
    token = codec.issue("user-1", "a@b.com")
    claims = codec.verify(token)

    assert claims["sub"] == "user-1"
    assert claims["email"] == "a@b.com"
    assert claims["type"] == "access"
    assert claims["exp"] - claims["iat"] == 3600


def test_expired_token_is_rejected(codec):
    issued_at = datetime.now(timezone.utc) - timedelta(hours=2)
    token = codec.issue("user-1", "a@b.com", issued_at=issued_at)
    assert codec.verify(token) is None


def test_wrong_secret_is_rejected(codec):
    other = AccessTokenCodec("another-secret", 3600)
    assert codec.verify(other.issue("user-1", "a@b.com")) is None


def test_tampered_token_is_rejected(codec):
    header, payload, signature = codec.issue("user-1", "a@b.com").split(".")
    forged = jwt.encode({"sub": "user-2", "type": "access"}, "x", algorithm="HS256").split(".")[1]
    assert codec.verify(f"{header}.{forged}.{signature}") is None


def test_other_token_type_is_rejected(codec):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "sub": "user-1",
            "email": "a@b.com",
            "type": "refresh",
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(hours=1)).timestamp()),
        },
        SECRET,
        algorithm="HS256",
    )
    assert codec.verify(token) is None


def test_token_without_expiry_is_rejected(codec):
    token = jwt.encode({"sub": "user-1", "type": "access", "iat": 0}, SECRET, algorithm="HS256")
    assert codec.verify(token) is None


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", None])
def test_malformed_input_never_raises(codec, token):
    assert codec.verify(token) is None


def test_missing_secret_is_a_programming_error():
    with pytest.raises(ValueError):
        AccessTokenCodec("", 3600)
    with pytest.raises(ValueError):
        AccessTokenCodec(SECRET, 0)
