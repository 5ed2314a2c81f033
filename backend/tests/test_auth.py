"""Unit tests for token signing and admin authentication."""

from datetime import timedelta

import jwt
import pytest

from authentication.auth import (
    authenticate_admin,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from models.config import settings
from models.exceptions import InvalidTokenException


class TestPasswords:
    def test_hash_round_trip(self):
        hashed = get_password_hash("s3cret!")
        assert hashed != "s3cret!"
        assert verify_password("s3cret!", hashed)
        assert not verify_password("wrong", hashed)


class TestTokens:
    def test_claims(self, admin_account):
        token = create_access_token(admin_account)
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])

        assert payload["sub"] == str(admin_account.id)
        assert payload["username"] == "siteadmin"
        assert payload["role"] == "admin"
        assert "exp" in payload

    def test_decode_returns_identity(self, admin_account):
        identity = decode_access_token(create_access_token(admin_account))

        assert identity.id == admin_account.id
        assert identity.username == "siteadmin"

    def test_expired(self, admin_account):
        token = create_access_token(admin_account, expires_delta=timedelta(minutes=-5))
        with pytest.raises(InvalidTokenException):
            decode_access_token(token)

    def test_wrong_key(self, admin_account):
        token = jwt.encode(
            {"sub": str(admin_account.id), "username": "x", "role": "admin", "exp": 9999999999},
            "another-key",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenException):
            decode_access_token(token)

    def test_missing_claims(self):
        token = jwt.encode({"exp": 9999999999}, settings.SECRET_KEY, algorithm="HS256")
        with pytest.raises(InvalidTokenException):
            decode_access_token(token)


class TestAuthenticateAdmin:
    def test_valid(self, db_session, admin_account, admin_password):
        assert authenticate_admin(db_session, "siteadmin", admin_password) is admin_account

    def test_wrong_password(self, db_session, admin_account):
        assert authenticate_admin(db_session, "siteadmin", "nope") is None

    def test_unknown_user(self, db_session, admin_password):
        assert authenticate_admin(db_session, "ghost", admin_password) is None
