"""Alembic migration tests.

File named test_zzz_alembic.py to sort LAST in pytest collection order
(alembic's fileConfig replaces the logging setup).
"""

from pathlib import Path

import sqlalchemy as sa
from alembic import command
from alembic.config import Config

ROOT = Path(__file__).resolve().parents[1]


def _config(db_path: Path) -> Config:
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", f"sqlite+aiosqlite:///{db_path}")
    return config


def test_alembic_upgrade_head(tmp_path: Path) -> None:
    """alembic upgrade head creates every table."""
    db_path = tmp_path / "migrate.db"
    command.upgrade(_config(db_path), "head")

    engine = sa.create_engine(f"sqlite:///{db_path}")
    try:
        tables = set(sa.inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {"users", "user_sessions", "audio_content", "reading_content", "yoga_content"} <= tables


def test_alembic_downgrade_base(tmp_path: Path) -> None:
    """Downgrading to base drops everything the upgrade created."""
    db_path = tmp_path / "migrate.db"
    config = _config(db_path)
    command.upgrade(config, "head")
    command.downgrade(config, "base")

    engine = sa.create_engine(f"sqlite:///{db_path}")
    try:
        tables = set(sa.inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert tables <= {"alembic_version"}
