from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from models.config import settings
from models.exceptions import MissingTokenException, InvalidTokenException
from models.schemas import TokenIdentity
from repositories.database import get_db

bearer_scheme = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def create_access_token(
    account: db_models.AdminAccount, expires_delta: Optional[timedelta] = None
) -> str:
    """Sign a bearer token naming the admin account."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    claims = {
        "sub": str(account.id),
        "username": account.username,
        "role": account.role.value,
        "exp": expire,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenIdentity:
    """
    Verify signature and expiry and return the carried identity.

    Raises:
        InvalidTokenException: If the token is expired, tampered with, or
            missing required claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
        return TokenIdentity(
            id=int(payload["sub"]),
            username=payload["username"],
            role=payload["role"],
        )
    except jwt.exceptions.InvalidTokenError:
        raise InvalidTokenException()
    except (KeyError, ValueError):
        raise InvalidTokenException()


def authenticate_admin(
    db: Session, username: str, password: str
) -> db_models.AdminAccount | None:
    account = (
        db.query(db_models.AdminAccount)
        .filter(db_models.AdminAccount.username == username)
        .first()
    )
    if not account:
        return None
    if not verify_password(password, account.hashed_password):
        return None
    return account


def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> TokenIdentity:
    """
    Require a valid admin bearer token.

    The verified identity is also stored on request.state.admin.

    Raises:
        MissingTokenException: No bearer token in the Authorization header (401).
        InvalidTokenException: Token fails verification or names an account
            that no longer exists (403).
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenException()

    identity = decode_access_token(credentials.credentials)

    account = db.get(db_models.AdminAccount, identity.id)
    if account is None:
        raise InvalidTokenException()

    request.state.admin = identity
    return identity
