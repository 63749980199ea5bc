"""Alembic environment configuration for async SQLAlchemy migrations.

Supports:
- Async migrations with asyncpg
- Auto-detection of model changes
- DATABASE_URL from environment
- Migration logging with version info
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from clusterplan.core.config import get_settings
from clusterplan.core.database import Base, to_async_url
from clusterplan.core.logging import db_logger

# Import all models so Alembic can detect them
from clusterplan.models import (  # noqa: F401
    AppUser,
    AuthSession,
    ClusterContentIdea,
    ContentCluster,
    Organization,
)

# Alembic Config object
config = context.config

# Setup logging from alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Model metadata for autogenerate support
target_metadata = Base.metadata


def get_database_url() -> str:
    """Get database URL from settings, converted for the async driver."""
    return to_async_url(str(get_settings().database_url))


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    This configures the context with just a URL and not an Engine.
    Calls to context.execute() emit the SQL to the script output.
    """
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Run migrations with the given connection."""
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations in 'online' mode with async engine."""
    head_rev = context.get_head_revision()
    version = str(head_rev) if head_rev else "initial"

    db_logger.migration_start(
        version=version,
        description=f"Migrating to {head_rev or 'head'}",
    )

    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = get_database_url()

    settings = get_settings()

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
        connect_args={
            "timeout": settings.db_connect_timeout,
            "command_timeout": settings.db_command_timeout,
        },
    )

    try:
        async with connectable.connect() as connection:
            await connection.run_sync(do_run_migrations)
    except Exception:
        db_logger.migration_end(version=version, success=False)
        raise
    else:
        db_logger.migration_end(version=version, success=True)
    finally:
        await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
