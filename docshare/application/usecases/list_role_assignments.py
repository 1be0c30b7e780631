"""
===============================================================================
USE CASE: List Role Assignments
===============================================================================

Name:
    List Role Assignments Use Case

Business Goal:
    Mostrarle al owner quién tiene acceso a su documento y con qué rol,
    resolviendo cada user_id a email.

Why (Context / Intención):
    - Los roles se guardan como user_ids; la UI necesita emails.
    - Un usuario borrado del directorio NO debe romper el listado completo:
      la entrada se conserva con el placeholder "User not found".
    - Las resoluciones son independientes y se ejecutan en paralelo
      (ThreadPoolExecutor acotado, con el contexto del request copiado a cada
      worker); el orden de salida es el de entrada.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ListRoleAssignmentsUseCase

Responsibilities:
    - Resolver documento + ownership (resolve_owned_document).
    - Unir readOnly (primero) y readWrite (después) en una sola secuencia.
    - Resolver emails en paralelo, tolerando fallos por entrada.
    - Registrar fallos parciales (log + métrica).

Collaborators:
    - DocumentRepository / UserDirectory
    - concurrent.futures.ThreadPoolExecutor
    - crosscutting.metrics.record_role_lookup_failure
===============================================================================
"""

from __future__ import annotations

import contextvars
from concurrent.futures import ThreadPoolExecutor
from typing import Final
from uuid import UUID

from ...crosscutting.logger import logger
from ...crosscutting.metrics import record_role_lookup_failure
from ...domain.document_policy import DocumentActor
from ...domain.entities import DocumentRole, RoleAssignment
from ...domain.repositories import DocumentRepository, UserDirectory
from .document_access import resolve_owned_document
from .document_results import RoleAssignmentListResult

USER_NOT_FOUND_PLACEHOLDER: Final[str] = "User not found"
DEFAULT_MAX_WORKERS = 8


class ListRoleAssignmentsUseCase:
    def __init__(
        self,
        document_repository: DocumentRepository,
        user_directory: UserDirectory,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._documents = document_repository
        self._users = user_directory
        self._max_workers = max(1, max_workers)

    def execute(
        self, document_id: UUID, actor: DocumentActor | None
    ) -> RoleAssignmentListResult:
        document, error = resolve_owned_document(
            document_id=document_id,
            actor=actor,
            document_repository=self._documents,
        )
        if error is not None:
            return RoleAssignmentListResult(error=error)

        entries: list[tuple[DocumentRole, UUID]] = [
            (DocumentRole.READ_ONLY, uid) for uid in document.read_only_user_ids
        ] + [(DocumentRole.READ_WRITE, uid) for uid in document.read_write_user_ids]
        if not entries:
            return RoleAssignmentListResult(assignments=[])

        workers = min(self._max_workers, len(entries))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # Cada worker corre con una copia del contexto (request_id en logs).
            futures = [
                executor.submit(contextvars.copy_context().run, self._resolve_email, uid)
                for _, uid in entries
            ]
            emails = [future.result() for future in futures]

        failures = sum(1 for email in emails if email == USER_NOT_FOUND_PLACEHOLDER)
        if failures:
            record_role_lookup_failure(failures)
            logger.warning(
                "Role lookup parcial: usuarios no resueltos",
                extra={"document_id": str(document_id), "unresolved": failures},
            )

        return RoleAssignmentListResult(
            assignments=[
                RoleAssignment(role=role, email=email)
                for (role, _), email in zip(entries, emails)
            ]
        )

    def _resolve_email(self, user_id: UUID) -> str:
        try:
            user = self._users.get_user_by_id(user_id)
        except Exception as exc:
            logger.warning(
                "Role lookup falló para usuario",
                extra={"user_id": str(user_id), "error": str(exc)},
            )
            return USER_NOT_FOUND_PLACEHOLDER
        if user is None:
            return USER_NOT_FOUND_PLACEHOLDER
        return user.email
