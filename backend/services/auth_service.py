"""
Admin authentication service.
"""

from loguru import logger
from sqlalchemy.orm import Session

import authentication.auth as auth
from models.exceptions import InvalidCredentialsException
from models.schemas import AdminLoginResponse, AdminUser
from repositories.admin_repository import AdminRepository


class AuthService:
    """Service for admin login."""

    @staticmethod
    def login(db: Session, username: str, password: str) -> AdminLoginResponse:
        """
        Check credentials, stamp last_login and issue a bearer token.

        Args:
            db: Database session
            username: Admin username
            password: Plain-text password

        Returns:
            AdminLoginResponse with token and public account fields

        Raises:
            InvalidCredentialsException: If the username is unknown or the
                password does not match
        """
        account = auth.authenticate_admin(db, username, password)
        if account is None:
            logger.warning(f"Failed admin login for username={username!r}")
            raise InvalidCredentialsException()

        account = AdminRepository(db).touch_last_login(account)
        token = auth.create_access_token(account)

        logger.info(f"Admin {account.username} logged in")
        return AdminLoginResponse(
            message="Login successful",
            token=token,
            user=AdminUser.model_validate(account),
        )
