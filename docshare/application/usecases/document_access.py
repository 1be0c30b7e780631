"""
===============================================================================
DOCUMENT ACCESS HELPERS (Owner Resolution)
===============================================================================

Name:
    Document Access Helpers

Business Goal:
    Centralizar la resolución "documento existe + actor es owner" que comparten
    listar roles, grant y revoke, garantizando mensajes y códigos
    idénticos en todos ellos.

-------------------------------------------------------------------------------
CRC CARD (Functions-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    document_access helpers (module-level functions)

Responsibilities:
    - Cargar el documento (NOT_FOUND si no existe).
    - Aplicar la política de ownership (FORBIDDEN si el actor no es owner).
    - Validar las precondiciones de grant/revoke (rol, email).
    - Construir errores estandarizados (DocumentError).

Collaborators:
    - DocumentRepository.get_document
    - UserDirectory.get_user_by_email
    - domain.document_policy.can_manage_roles
    - document_results.DocumentError / DocumentErrorCode
===============================================================================
"""

from __future__ import annotations

from typing import Final, Tuple
from uuid import UUID

from ...domain.document_policy import DocumentActor, can_manage_roles
from ...domain.entities import Document, DocumentRole
from ...domain.repositories import DocumentRepository, UserDirectory
from ...identity.users import User, normalize_email
from .document_results import DocumentError, DocumentErrorCode

_RESOURCE_NAME: Final[str] = "Document"
_MSG_NOT_FOUND: Final[str] = "Document not found."
_MSG_FORBIDDEN: Final[str] = "Access denied."
MSG_NOT_ALLOWED_TO_CHANGE_ACCESS: Final[str] = "not allowed to change access"
MSG_EMAIL_NOT_REGISTERED: Final[str] = "email not registered"


def resolve_owned_document(
    *,
    document_id: UUID,
    actor: DocumentActor | None,
    document_repository: DocumentRepository,
    forbidden_message: str = _MSG_FORBIDDEN,
) -> Tuple[Document | None, DocumentError | None]:
    """
    Resuelve un documento que el actor debe poseer.

    Retorna:
      - (document, None) si existe y el actor es owner
      - (None, DocumentError) si no existe / forbidden
    """
    document = document_repository.get_document(document_id)
    if document is None:
        return None, not_found_error()

    if not can_manage_roles(document, actor):
        return None, forbidden_error(forbidden_message)

    return document, None


def resolve_role_change(
    *,
    document_id: UUID,
    actor: DocumentActor | None,
    email: str,
    role: DocumentRole | str,
    document_repository: DocumentRepository,
    user_directory: UserDirectory,
) -> Tuple[Document | None, User | None, DocumentError | None]:
    """
    Precondiciones comunes de grant / revoke.

    Orden de checks:
      1. documento existe (NOT_FOUND)
      2. actor es owner (FORBIDDEN "not allowed to change access")
      3. rol otorgable (VALIDATION_ERROR para Admin)
      4. email registrado (NOT_FOUND "email not registered")

    Que el usuario no sea el owner lo valida solo el grant: revocar al
    owner es un no-op porque nunca figura en los sets.
    """
    document, error = resolve_owned_document(
        document_id=document_id,
        actor=actor,
        document_repository=document_repository,
        forbidden_message=MSG_NOT_ALLOWED_TO_CHANGE_ACCESS,
    )
    if error is not None:
        return None, None, error

    try:
        role = DocumentRole(role)
    except ValueError:
        return None, None, validation_error(f"Unknown role: {role}.")
    if not role.is_grantable:
        return None, None, validation_error(
            f"Role {role.value} cannot be granted or revoked."
        )

    user = user_directory.get_user_by_email(normalize_email(email))
    if user is None:
        return None, None, DocumentError(
            code=DocumentErrorCode.NOT_FOUND,
            message=MSG_EMAIL_NOT_REGISTERED,
            resource="User",
        )

    return document, user, None


def validation_error(message: str) -> DocumentError:
    return DocumentError(
        code=DocumentErrorCode.VALIDATION_ERROR,
        message=message,
        resource=_RESOURCE_NAME,
    )


def not_found_error(message: str = _MSG_NOT_FOUND) -> DocumentError:
    return DocumentError(
        code=DocumentErrorCode.NOT_FOUND,
        message=message,
        resource=_RESOURCE_NAME,
    )


def forbidden_error(message: str = _MSG_FORBIDDEN) -> DocumentError:
    return DocumentError(
        code=DocumentErrorCode.FORBIDDEN,
        message=message,
        resource=_RESOURCE_NAME,
    )
