"""initial portfolio schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 00:00:00.000000

Creates contact submissions, visitors with their visit events, projects,
blog posts and admin accounts from the SQLAlchemy `Base` metadata.
"""

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    from repositories.database import Base

    # Registers the models on Base.metadata
    import repositories.db_models  # noqa: F401

    Base.metadata.create_all(bind=op.get_bind())


def downgrade() -> None:
    """Drop every portfolio table. Destroys all stored data."""
    from repositories.database import Base

    import repositories.db_models  # noqa: F401

    Base.metadata.drop_all(bind=op.get_bind())
