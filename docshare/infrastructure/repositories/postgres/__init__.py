"""
PostgreSQL Repository Implementations.

Raw SQL over psycopg 3 + psycopg_pool.
"""

from .document import PostgresDocumentRepository
from .user import PostgresUserDirectory

__all__ = [
    "PostgresDocumentRepository",
    "PostgresUserDirectory",
]
