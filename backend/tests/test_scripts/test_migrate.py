"""Tests for the migration helper script."""

from unittest.mock import patch

from sqlalchemy import create_engine, inspect

from scripts import migrate

PORTFOLIO_TABLES = {
    "admin_accounts",
    "blog_posts",
    "contact_submissions",
    "projects",
    "visit_events",
    "visitors",
}


class TestMigrate:
    def test_config_points_at_alembic_dir(self):
        cfg = migrate.get_config()
        assert cfg.get_main_option("script_location").endswith("alembic")

    def test_usage_on_bad_arguments(self, capsys):
        assert migrate.main([]) == 2
        assert migrate.main(["sideways"]) == 2
        assert "Usage" in capsys.readouterr().out

    def test_upgrade_and_downgrade(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'migrate.db'}")

        with patch("repositories.database.engine", engine):
            assert migrate.main(["upgrade"]) == 0
            tables = set(inspect(engine).get_table_names())
            assert PORTFOLIO_TABLES <= tables
            assert "alembic_version" in tables

            migrate.downgrade("base")
            assert not PORTFOLIO_TABLES & set(inspect(engine).get_table_names())

        engine.dispose()
