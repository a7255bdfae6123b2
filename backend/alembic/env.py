"""Alembic environment: migration runner for the Choreboard SQLite store.

Two entry points share this file:
    - startup (infrastructure/migrations.py) passes an open connection via
      config.attributes["connection"]; migrations run on it directly
    - the CLI (`alembic upgrade head`) resolves the store from Settings and opens
      its own async engine

Design Decisions:
    - render_as_batch: SQLite cannot ALTER most constraints in place
    - The CLI path resolves the file exactly like the app (resolve_store_path)
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from choreboard.db.base import Base
# Import all models so Base.metadata has them
from choreboard.models.person import PersonRow  # noqa: F401
from choreboard.models.chore import ChoreRow  # noqa: F401
from choreboard.models.assignment import AssignmentRow  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _get_database_url() -> str:
    """Store URL from app settings, falling back to alembic.ini."""
    from choreboard.config import get_settings
    from choreboard.infrastructure.database import resolve_store_path, store_url

    url = config.get_main_option("sqlalchemy.url")
    if url:
        return url
    path = resolve_store_path(get_settings().database)
    return store_url(path).render_as_string(hide_password=False)


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = _get_database_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations in 'online' mode with async engine."""
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = _get_database_url()
    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connection = config.attributes.get("connection")
    if connection is not None:
        do_run_migrations(connection)
        return
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
