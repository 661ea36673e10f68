from datetime import datetime, timedelta, timezone

import jwt
import pytest

from core.config import Settings, settings
from core.errors import AuthError
from core.security import hash_password, issue_access_token, verify_access_token, verify_password


def test_default_bcrypt_cost_is_12():
    assert Settings.model_fields["bcrypt_rounds"].default == 12


def test_hash_is_salted_and_never_the_plaintext():
    first = hash_password("secret1")
    second = hash_password("secret1")

    assert first != "secret1"
    assert first.startswith("$2b$")
    assert first != second


def test_verify_password():
    stored = hash_password("secret1")

    assert verify_password("secret1", stored)
    assert not verify_password("secret2", stored)
    assert not verify_password("", stored)


def test_verify_password_with_malformed_hash_is_false():
    assert not verify_password("secret1", "not-a-bcrypt-hash")
    assert not verify_password("secret1", "")


def test_issue_and_verify_round_trip():
    token = issue_access_token(42)

    assert verify_access_token(token.value) == 42
    remaining = token.expires_at - datetime.now(timezone.utc)
    assert timedelta(minutes=settings.access_token_expire_minutes - 1) < remaining


def test_expired_token_rejected():
    token = issue_access_token(42, expires_delta=timedelta(seconds=-1))

    with pytest.raises(AuthError, match="Invalid or expired token"):
        verify_access_token(token.value)


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        "",
        jwt.encode(
            {"sub": "42", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "some-other-secret",
            algorithm="HS256",
        ),
        jwt.encode({"sub": "42"}, settings.secret_key, algorithm="HS256"),
        jwt.encode(
            {"sub": "abc", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            settings.secret_key,
            algorithm="HS256",
        ),
    ],
    ids=["garbage", "empty", "foreign-signature", "no-expiry", "non-numeric-subject"],
)
def test_invalid_tokens_rejected(token):
    with pytest.raises(AuthError, match="Invalid or expired token"):
        verify_access_token(token)
