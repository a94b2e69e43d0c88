"""Alembic environment — async migration runner for the Order Management API.

Invariants:
    - The database URL comes from Settings (DATABASE_URL), the same source the app
      uses, so postgresql:// is already rewritten to postgresql+asyncpg://
    - Every model module is imported before metadata is read (autogenerate needs it)
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from order_api.config import get_settings
from order_api.db.base import Base
from order_api.models import Customer, Order, User  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
database_url = get_settings().database_url


def _configure_and_run(**options) -> None:
    context.configure(target_metadata=target_metadata, **options)
    with context.begin_transaction():
        context.run_migrations()


async def _run_online() -> None:
    engine = create_async_engine(database_url, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(
            lambda sync_conn: _configure_and_run(connection=sync_conn),
        )
    await engine.dispose()


def _run_offline() -> None:
    """Emit SQL to stdout instead of executing it (alembic upgrade --sql)."""
    _configure_and_run(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


if context.is_offline_mode():
    _run_offline()
else:
    asyncio.run(_run_online())
