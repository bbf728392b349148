"""Alembic environment for the trip planner schema.

The database URL comes from alembic.ini when set, otherwise from DATABASE_URL
(the same variable the application reads).
"""

import os

from dotenv import load_dotenv
from sqlalchemy import create_engine, pool
from sqlmodel import SQLModel

import trip_planner.models  # noqa: F401  registers every table on SQLModel.metadata
from alembic import context

load_dotenv()

target_metadata = SQLModel.metadata


def get_url() -> str:
    url = context.config.get_main_option("sqlalchemy.url")
    if url:
        return url
    return os.getenv("DATABASE_URL", "sqlite:///./trip_planner.db")


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (emit SQL without a live connection)."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (with a live database connection)."""
    connectable = create_engine(get_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        # SQLite cannot ALTER most constraints in place
        context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
