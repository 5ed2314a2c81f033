"""Run the portfolio schema migrations.

Usage:
    python scripts/migrate.py upgrade [revision]
    python scripts/migrate.py downgrade [revision]

Alembic is configured in code (script location only), so no alembic.ini is
needed; the database URL comes from settings via alembic/env.py.
"""

import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def get_config() -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    return cfg


def upgrade(rev: str = "head") -> None:
    command.upgrade(get_config(), rev)


def downgrade(rev: str = "-1") -> None:
    command.downgrade(get_config(), rev)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] not in ("upgrade", "downgrade"):
        print("Usage: python scripts/migrate.py <upgrade|downgrade> [revision]")
        return 2

    rev = argv[1] if len(argv) > 1 else None
    if argv[0] == "upgrade":
        upgrade(rev or "head")
    else:
        downgrade(rev or "-1")
    return 0


if __name__ == "__main__":
    sys.exit(main())
