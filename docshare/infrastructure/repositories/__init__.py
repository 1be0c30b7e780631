"""
Repository implementations (PostgreSQL + in-memory).
"""

from .in_memory import InMemoryDocumentRepository, InMemoryUserDirectory
from .postgres import PostgresDocumentRepository, PostgresUserDirectory

__all__ = [
    "InMemoryDocumentRepository",
    "InMemoryUserDirectory",
    "PostgresDocumentRepository",
    "PostgresUserDirectory",
]
