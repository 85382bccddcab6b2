"""
Acaia Club Backend — Alembic Environment
=========================================

What:  Points Alembic at the venue schema (floor plans, vinyl wall,
       purchasing, clients, staff) and at the configured database.
Why:   The app never calls create_all() outside tests; every table change
       ships as a revision under alembic/versions/.
How:   DATABASE_URL comes from acaiaclub.config, so migrations and the API
       always target the same database. Online runs go through an async
       engine and hand a sync connection to Alembic via run_sync().
Who:   The `alembic` CLI (`upgrade head` before starting the API,
       `revision --autogenerate` during development).

Autogenerate:
    compare_type            picks up Numeric precision and enum changes
    compare_server_default  picks up changed column defaults
    empty diff              no revision file is written
    SQLite URLs             batch mode, since SQLite cannot ALTER columns
"""

import asyncio
import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from acaiaclub import models  # noqa: F401  (imports every model onto Base.metadata)
from acaiaclub.config import settings
from acaiaclub.database import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

target_metadata = Base.metadata

# alembic.ini holds no URL
config.set_main_option("sqlalchemy.url", settings.database_url)


def skip_empty_revisions(context_, revision, directives) -> None:
    """Drop an autogenerated revision whose upgrade has no operations."""
    if not getattr(config.cmd_opts, "autogenerate", False):
        return
    script = directives[0]
    if script.upgrade_ops.is_empty():
        directives[:] = []
        logger.info("Models match the database; no revision generated.")


def configure_options(url: str) -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "compare_server_default": True,
        "render_as_batch": url.startswith("sqlite"),
        "process_revision_directives": skip_empty_revisions,
    }


def run_migrations_offline() -> None:
    """Print the SQL instead of running it (for review before a deploy)."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **configure_options(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        **configure_options(config.get_main_option("sqlalchemy.url")),
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,  # single run, nothing to pool
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
