# Copyright (c) Stocktracker.
# SPDX-License-Identifier: MIT
"""Alembic environment.

The target URL is ``DATABASE_URL`` (through application settings) or, when
that is unset, ``sqlalchemy.url`` from alembic.ini. ``ENVIRONMENT`` must be
set so a migration never runs against an unnamed deployment. SQLite runs use
batch mode for ALTERs.

    ENVIRONMENT=development alembic upgrade head
    ENVIRONMENT=development alembic -x show_url=1 upgrade head --sql
"""

from __future__ import annotations

import asyncio
import logging
import logging.config
import os

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import create_async_engine

from stocktracker_api.config.settings import get_settings
from stocktracker_api.infrastructure.database.models import financials  # noqa: F401
from stocktracker_api.infrastructure.database.models.base import metadata

config = context.config
if config.config_file_name is not None:
    logging.config.fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")


def _database_url() -> str:
    if not (os.getenv("ENVIRONMENT") or "").strip():
        raise RuntimeError("Set ENVIRONMENT before running migrations.")
    url = get_settings().database_url if os.getenv("DATABASE_URL") else None
    url = url or config.get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError("No database URL: set DATABASE_URL or sqlalchemy.url.")
    if context.get_x_argument(as_dictionary=True).get("show_url") == "1":
        logger.info("Migrating %s", make_url(url).render_as_string(hide_password=True))
    return url


def _run(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=metadata,
        compare_type=True,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def _run_online() -> None:
    engine = create_async_engine(_database_url(), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    context.configure(
        url=_database_url(),
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()
else:
    asyncio.run(_run_online())
