"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Evitar imports profundos y acoplamientos innecesarios.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .document_policy import (
    DocumentActor,
    can_delete_document,
    can_manage_roles,
    can_view_document,
    effective_role,
    is_document_owner,
)
from .entities import (
    GRANTABLE_ROLES,
    Document,
    DocumentRole,
    RoleAssignment,
    VisibleDocument,
)
from .repositories import DocumentRepository, UserDirectory

__all__ = [
    # Entities
    "Document",
    "DocumentRole",
    "GRANTABLE_ROLES",
    "VisibleDocument",
    "RoleAssignment",
    # Policy
    "DocumentActor",
    "is_document_owner",
    "effective_role",
    "can_view_document",
    "can_manage_roles",
    "can_delete_document",
    # Repositories
    "DocumentRepository",
    "UserDirectory",
]
