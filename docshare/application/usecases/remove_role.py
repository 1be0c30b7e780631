"""
===============================================================================
USE CASE: Remove Role
===============================================================================

Revoca readOnly o readWrite de un usuario (por email).

Reglas:
  - Mismas precondiciones que GrantRoleUseCase, salvo el check de owner:
    el owner nunca está en los sets, revocarlo es no-op.
  - Revocar a un usuario que no está en el set es no-op (changed=False).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ...crosscutting.logger import logger
from ...crosscutting.metrics import record_role_change
from ...domain.document_policy import DocumentActor
from ...domain.entities import DocumentRole
from ...domain.repositories import DocumentRepository, UserDirectory
from .document_access import resolve_role_change
from .document_results import RoleChangeResult


class RemoveRoleUseCase:
    """Revoca un rol de documento."""

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

        role = DocumentRole(role)
        changed = self._documents.remove_from_role_set(document.id, role, grantee.id)
        if changed:
            record_role_change("revoke", role.value)
            logger.info(
                "Rol revocado",
                extra={
                    "document_id": str(document.id),
                    "grantee_user_id": str(grantee.id),
                    "role": role.value,
                },
            )
        return RoleChangeResult(changed=changed)
