"""
Application use cases (document sharing / access control).
"""

from .create_document import CreateDocumentInput, CreateDocumentUseCase
from .delete_document import DeleteDocumentUseCase
from .document_results import (
    DeleteDocumentResult,
    DocumentError,
    DocumentErrorCode,
    DocumentResult,
    RoleAssignmentListResult,
    RoleChangeResult,
    VisibleDocumentListResult,
)
from .find_document_by_name import FindDocumentByNameUseCase
from .get_document import GetDocumentUseCase
from .grant_role import GrantRoleUseCase
from .list_role_assignments import (
    USER_NOT_FOUND_PLACEHOLDER,
    ListRoleAssignmentsUseCase,
)
from .list_visible_documents import ListVisibleDocumentsUseCase
from .remove_role import RemoveRoleUseCase

__all__ = [
    # Results
    "DocumentError",
    "DocumentErrorCode",
    "DocumentResult",
    "VisibleDocumentListResult",
    "RoleAssignmentListResult",
    "RoleChangeResult",
    "DeleteDocumentResult",
    # Documents
    "CreateDocumentInput",
    "CreateDocumentUseCase",
    "GetDocumentUseCase",
    "FindDocumentByNameUseCase",
    "ListVisibleDocumentsUseCase",
    "DeleteDocumentUseCase",
    # Roles
    "ListRoleAssignmentsUseCase",
    "GrantRoleUseCase",
    "RemoveRoleUseCase",
    "USER_NOT_FOUND_PLACEHOLDER",
]
