"""Alembic migration runner used by the CLI."""

from alembic.config import Config

from alembic import command


def run_migrations_sync(revision: str = "head", config_file: str = "alembic.ini") -> None:
    """Upgrade the database to the given revision."""
    alembic_cfg = Config(config_file)
    command.upgrade(alembic_cfg, revision)
