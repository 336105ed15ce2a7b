"""Alembic migration environment for the tastebud schema.

Invariants:
    - Migrations target the same URL the service connects to: an explicit
      DATABASE_URL wins, otherwise sqlalchemy.url from alembic.ini
    - postgresql:// URLs are rewritten by Settings, never here
    - Online runs use a throwaway NullPool engine, disposed after the upgrade
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from tastebud.config import Settings
from tastebud.db.base import Base
import tastebud.models  # noqa: F401  (registers every table on Base.metadata)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _migration_url() -> str:
    if os.environ.get("DATABASE_URL"):
        return Settings().database_url
    return config.get_main_option("sqlalchemy.url")


def _configure_and_run(**options) -> None:
    context.configure(target_metadata=target_metadata, **options)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """Emit SQL for the upgrade without connecting."""
    _configure_and_run(
        url=_migration_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


async def _upgrade_with_async_engine() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _migration_url()
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(
            lambda sync_conn: _configure_and_run(connection=sync_conn),
        )
    await engine.dispose()


def run_migrations_online() -> None:
    """Apply the upgrade against a live database."""
    asyncio.run(_upgrade_with_async_engine())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
