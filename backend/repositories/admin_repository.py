"""
Admin account repository.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class AdminRepository(BaseRepository[db_models.AdminAccount]):
    """Repository for AdminAccount entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db_models.AdminAccount, db)

    def get_by_username(self, username: str) -> db_models.AdminAccount | None:
        """
        Get admin account by username.

        Args:
            username: Login name

        Returns:
            AdminAccount if found, None otherwise
        """
        return (
            self.db.query(db_models.AdminAccount)
            .filter(db_models.AdminAccount.username == username)
            .first()
        )

    def touch_last_login(
        self, account: db_models.AdminAccount
    ) -> db_models.AdminAccount:
        """Stamp last_login with the current time."""
        account.last_login = datetime.now(timezone.utc)
        return self.update(account)
