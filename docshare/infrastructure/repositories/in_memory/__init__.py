"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .document import InMemoryDocumentRepository
from .user import InMemoryUserDirectory

__all__ = [
    "InMemoryDocumentRepository",
    "InMemoryUserDirectory",
]
