"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing (fake repositories).

Collaborators
- domain.entities: Document, DocumentRole
- identity.users: User
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- "Not found" is None / False, never an exception.
- Infrastructure failures surface as crosscutting.exceptions.PersistenceError.
"""

from typing import List, Optional, Protocol
from uuid import UUID

from ..identity.users import User
from .entities import Document, DocumentRole


class DocumentRepository(Protocol):
    """
    R: Interface for document persistence.

    Role lists are embedded in the document row, so deleting a document
    removes every role assignment with it.
    """

    def create_document(self, document: Document) -> Document:
        """R: Persist a new document (role lists start empty)."""
        ...

    def get_document(self, document_id: UUID) -> Optional[Document]:
        """R: Fetch a document by ID."""
        ...

    def get_document_by_name_and_owner(
        self, name: str, owner_user_id: UUID
    ) -> Optional[Document]:
        """R: Fetch the oldest document with this exact name owned by owner_user_id."""
        ...

    def list_documents_visible_to(self, user_id: UUID) -> List[Document]:
        """
        R: Documents where user_id is owner or in either role list.

        Implementations MUST return a stable ordering (created_at asc, id asc).
        """
        ...

    def delete_document(self, document_id: UUID) -> bool:
        """R: Hard delete. Returns True if the document existed."""
        ...

    def add_to_role_set(
        self, document_id: UUID, role: DocumentRole, user_id: UUID
    ) -> bool:
        """
        R: Add user_id to the role list, removing it from the other list.

        Single atomic write. Returns True if the document changed
        (False when the user already held exactly this role or the
        document does not exist).
        """
        ...

    def remove_from_role_set(
        self, document_id: UUID, role: DocumentRole, user_id: UUID
    ) -> bool:
        """R: Remove user_id from the role list. Returns True if it was present."""
        ...

    def ping(self) -> bool:
        """R: Check repository connectivity/availability."""
        ...


class UserDirectory(Protocol):
    """R: Read-only lookup of registered users."""

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Fetch a user by (normalized) email."""
        ...

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        """R: Fetch a user by ID."""
        ...
