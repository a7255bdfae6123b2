"""Schema Migrations: runs the alembic revisions against a live async engine.

Invariants:
    - Migrations run on a connection borrowed from the store's own engine
    - upgrade to head is idempotent: already-applied revisions are skipped
    - Any alembic failure propagates; the caller decides it is fatal

Design Decisions:
    - Connection handed to env.py through Config.attributes (alembic cookbook pattern),
      so the CLI (`alembic upgrade head`) and startup share one env.py
    - No alembic.ini needed at runtime: script_location is set in code
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

ALEMBIC_DIR = Path(__file__).resolve().parents[2] / "alembic"


def alembic_config(connection: Connection | None = None) -> Config:
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    if connection is not None:
        config.attributes["connection"] = connection
    return config


def head_revision() -> str | None:
    return ScriptDirectory.from_config(alembic_config()).get_current_head()


def current_revision(connection: Connection) -> str | None:
    return MigrationContext.configure(connection).get_current_revision()


def _upgrade_to_head(connection: Connection) -> None:
    before = current_revision(connection)
    command.upgrade(alembic_config(connection), "head")
    after = current_revision(connection)
    if before != after:
        logger.info(f"Schema migrated from {before or 'empty'} to {after}")
    else:
        logger.debug(f"Schema already at {after}")


async def apply_migrations(engine: AsyncEngine) -> None:
    """Upgrade the store behind `engine` to the latest revision."""
    async with engine.begin() as conn:
        await conn.run_sync(_upgrade_to_head)
