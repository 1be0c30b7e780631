"""
===============================================================================
USE CASE: Delete Document
===============================================================================

Elimina un documento junto con sus listas de rol embebidas.

Reglas:
  - Documento debe existir (NOT_FOUND).
  - Solo el owner elimina (FORBIDDEN), sin importar el rol que tenga otro usuario.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ...crosscutting.logger import logger
from ...domain.document_policy import DocumentActor, can_delete_document
from ...domain.repositories import DocumentRepository
from .document_access import forbidden_error, not_found_error
from .document_results import DeleteDocumentResult


class DeleteDocumentUseCase:
    def __init__(self, document_repository: DocumentRepository) -> None:
        self._documents = document_repository

    def execute(
        self, document_id: UUID, actor: DocumentActor | None
    ) -> DeleteDocumentResult:
        document = self._documents.get_document(document_id)
        if document is None:
            return DeleteDocumentResult(error=not_found_error())

        if not can_delete_document(document, actor):
            return DeleteDocumentResult(error=forbidden_error())

        deleted = self._documents.delete_document(document_id)
        if not deleted:
            # Borrado concurrente entre el get y el delete.
            return DeleteDocumentResult(error=not_found_error())

        logger.info("Documento eliminado", extra={"document_id": str(document_id)})
        return DeleteDocumentResult(deleted=True)
