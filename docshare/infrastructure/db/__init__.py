"""Shared psycopg connection pool."""

from .pool import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
    PoolStateError,
    close_pool,
    get_pool,
    init_pool,
    reset_pool,
)

__all__ = [
    "init_pool",
    "get_pool",
    "close_pool",
    "reset_pool",
    "PoolStateError",
    "PoolAlreadyInitializedError",
    "PoolNotInitializedError",
]
