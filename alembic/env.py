"""Alembic migration environment."""

from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context
import os
import re
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.database import Base
from app.models import Account, Warehouse, Shipment  # noqa: F401
from app.core.config import settings

config = context.config

database_url = settings.DATABASE_URL
redacted_url = re.sub(r':([^/@]+)@', ':****@', database_url)
print(f"Using database URL (redacted): {redacted_url}")

# Alembic runs synchronously: psycopg 3 for Postgres, the stdlib driver for SQLite
if database_url.startswith("postgresql+asyncpg://"):
    sync_database_url = database_url.replace("+asyncpg", "+psycopg")
elif database_url.startswith("postgres://"):
    sync_database_url = database_url.replace("postgres://", "postgresql+psycopg://", 1)
elif database_url.startswith("postgresql://") and "+psycopg" not in database_url:
    sync_database_url = database_url.replace("postgresql://", "postgresql+psycopg://", 1)
elif database_url.startswith("sqlite+aiosqlite://"):
    sync_database_url = database_url.replace("sqlite+aiosqlite://", "sqlite://", 1)
else:
    sync_database_url = database_url

config.set_main_option("sqlalchemy.url", sync_database_url)

# Logging config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
