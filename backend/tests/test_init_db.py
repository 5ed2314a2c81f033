"""Unit tests for init_db functionality."""

from unittest.mock import patch

from authentication.auth import verify_password
from models.config import settings
from repositories.db_models import AdminAccount, AdminRole


class TestSeedAdmin:
    """Tests for seed_admin function."""

    def test_creates_admin_from_settings(self, db_session):
        from init_db import seed_admin

        admin = seed_admin(db_session)

        assert admin is not None
        assert admin.username == settings.ADMIN_USERNAME
        assert admin.email == settings.ADMIN_EMAIL
        assert admin.role == AdminRole.ADMIN
        assert verify_password(settings.ADMIN_PASSWORD, admin.hashed_password)

    def test_is_idempotent(self, db_session):
        from init_db import seed_admin

        seed_admin(db_session)
        assert seed_admin(db_session) is None
        assert db_session.query(AdminAccount).count() == 1


class TestInitDb:
    """Tests for init_db against the in-memory test engine."""

    def test_creates_tables_and_seeds(self):
        import init_db
        from conftest import TestingSessionLocal, engine
        from repositories.database import Base

        Base.metadata.drop_all(bind=engine)
        try:
            with patch.object(init_db, "engine", engine), patch.object(
                init_db, "SessionLocal", TestingSessionLocal
            ):
                init_db.init_db()
                init_db.init_db()

            session = TestingSessionLocal()
            try:
                assert session.query(AdminAccount).count() == 1
            finally:
                session.close()
        finally:
            Base.metadata.drop_all(bind=engine)
