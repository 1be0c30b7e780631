"""
===============================================================================
USE CASE: Grant Role
===============================================================================

Otorga readOnly o readWrite sobre un documento a un usuario registrado (por email).

Reglas:
  - Documento debe existir.
  - Solo el owner gestiona roles ("not allowed to change access").
  - El email debe estar registrado en el directorio ("email not registered").
  - Admin no es otorgable; el owner no puede recibir roles.
  - Semántica de set: re-grant del mismo rol es no-op (changed=False).
  - Grant del rol opuesto mueve al usuario (write atómico en el repo).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ...crosscutting.logger import logger
from ...crosscutting.metrics import record_role_change
from ...domain.document_policy import DocumentActor
from ...domain.entities import DocumentRole
from ...domain.repositories import DocumentRepository, UserDirectory
from .document_access import resolve_role_change, validation_error
from .document_results import RoleChangeResult


class GrantRoleUseCase:
    """Otorga un rol de documento a un usuario."""

    def __init__(
        self,
        document_repository: DocumentRepository,
        user_directory: UserDirectory,
    ) -> None:
        self._documents = document_repository
        self._users = user_directory

    def execute(
        self,
        document_id: UUID,
        actor: DocumentActor | None,
        *,
        email: str,
        role: DocumentRole,
    ) -> RoleChangeResult:
        document, grantee, error = resolve_role_change(
            document_id=document_id,
            actor=actor,
            email=email,
            role=role,
            document_repository=self._documents,
            user_directory=self._users,
        )
        if error is not None:
            return RoleChangeResult(error=error)
        if grantee.id == document.owner_user_id:
            return RoleChangeResult(
                error=validation_error("The owner already holds the Admin role.")
            )

        role = DocumentRole(role)
        changed = self._documents.add_to_role_set(document.id, role, grantee.id)
        if changed:
            record_role_change("grant", role.value)

        logger.info(
            "Rol otorgado" if changed else "Grant sin cambios",
            extra={
                "document_id": str(document.id),
                "grantee_user_id": str(grantee.id),
                "role": role.value,
            },
        )
        return RoleChangeResult(changed=changed)
