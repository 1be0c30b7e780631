"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool psycopg compartido por los repositorios Postgres

Responsabilidades:
  - Abrir un único ConnectionPool por proceso (lifespan de la app).
  - Entregarlo a PostgresDocumentRepository / PostgresUserDirectory.
  - Aplicar statement_timeout a cada conexión nueva.
  - Cerrarlo en shutdown (y resetearlo entre tests).

Colaboradores:
  - psycopg_pool.ConnectionPool
  - api/main.py (lifespan) y tests/integration/conftest.py
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from psycopg import Connection
from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger

POOL_NAME = "docshare"


class PoolStateError(RuntimeError):
    """Uso del pool fuera de su ciclo de vida (init -> get -> close)."""


class PoolAlreadyInitializedError(PoolStateError):
    pass


class PoolNotInitializedError(PoolStateError):
    pass


_pool: Optional[ConnectionPool] = None
_lock = threading.Lock()


def _timeout_configurer(statement_timeout_ms: int) -> Callable[[Connection], None]:
    def configure(conn: Connection) -> None:
        if statement_timeout_ms > 0:
            conn.execute(f"SET statement_timeout = {int(statement_timeout_ms)}")
            conn.commit()

    return configure


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    *,
    statement_timeout_ms: int | None = None,
) -> ConnectionPool:
    """Abre el pool; falla si ya hay uno abierto en este proceso."""
    global _pool

    if statement_timeout_ms is None:
        from ...crosscutting.config import get_settings

        statement_timeout_ms = get_settings().db_statement_timeout_ms

    with _lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("DB pool already initialized")

        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            name=POOL_NAME,
            configure=_timeout_configurer(statement_timeout_ms),
            open=True,
        )
        logger.info(
            "Pool DB abierto",
            extra={
                "min_size": min_size,
                "max_size": max_size,
                "statement_timeout_ms": statement_timeout_ms,
            },
        )
        return _pool


def get_pool() -> ConnectionPool:
    if _pool is None:
        raise PoolNotInitializedError("DB pool not initialized; call init_pool()")
    return _pool


def close_pool() -> None:
    """Cierra el pool si está abierto. Llamarlo dos veces no falla."""
    global _pool

    with _lock:
        pool, _pool = _pool, None
    if pool is None:
        return
    pool.close()
    logger.info("Pool DB cerrado")


# Alias para tests: mismo efecto que close_pool.
reset_pool = close_pool
