"""
============================================================
CRC — alembic/env.py
============================================================
Responsabilidades:
  - Correr las migraciones de docshare (users + documents) online u offline.
  - Tomar la URL de DATABASE_URL (misma variable que la app) y forzar el
    driver psycopg 3 para SQLAlchemy.

Colaboradores:
  - alembic.context
  - SQLAlchemy (solo como motor de migraciones; la app usa SQL crudo)

Notas:
  - No hay modelos ORM: target_metadata = None, migraciones escritas a mano.
============================================================
"""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

config = context.config

if config.config_file_name is not None:
    # No apagar el logger "docshare" cuando se migra desde los tests.
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = None

_DRIVER_PREFIXES = ("postgresql://", "postgres://")


def database_url() -> str:
    raw = os.environ.get("DATABASE_URL") or config.get_main_option("sqlalchemy.url")
    for prefix in _DRIVER_PREFIXES:
        if raw.startswith(prefix):
            return "postgresql+psycopg://" + raw[len(prefix):]
    return raw


def run_migrations_offline() -> None:
    context.configure(
        url=database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(database_url(), poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
