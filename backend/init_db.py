"""Initialize the database and seed the admin account."""

from loguru import logger
from sqlalchemy.orm import Session

from authentication.auth import get_password_hash
from models.config import settings
from repositories.database import Base, SessionLocal, engine
from repositories.db_models import AdminAccount, AdminRole


def seed_admin(db: Session) -> AdminAccount | None:
    """
    Create the admin account from settings unless it already exists.

    Returns:
        The new account, or None if one with ADMIN_USERNAME was already present
    """
    existing = (
        db.query(AdminAccount)
        .filter(AdminAccount.username == settings.ADMIN_USERNAME)
        .first()
    )
    if existing:
        return None

    admin = AdminAccount(
        username=settings.ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        role=AdminRole.ADMIN,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def init_db() -> None:
    """Create tables and default data."""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        admin = seed_admin(db)
        if admin:
            logger.info(f"Admin account created: {admin.username} <{admin.email}>")
            logger.info("Password taken from ADMIN_PASSWORD; change it in production")
        else:
            logger.info(f"Admin account {settings.ADMIN_USERNAME} already exists")

        logger.info("Database initialization complete")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
