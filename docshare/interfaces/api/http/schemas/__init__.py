"""
HTTP schemas (request/response DTOs).
"""

from .documents import (
    CreateDocumentReq,
    DocumentRes,
    RoleAssignmentRes,
    RoleAssignmentsRes,
    RoleChangeReq,
    RoleChangeRes,
    VisibleDocumentRes,
    VisibleDocumentsRes,
)

__all__ = [
    "CreateDocumentReq",
    "DocumentRes",
    "RoleAssignmentRes",
    "RoleAssignmentsRes",
    "RoleChangeReq",
    "RoleChangeRes",
    "VisibleDocumentRes",
    "VisibleDocumentsRes",
]
