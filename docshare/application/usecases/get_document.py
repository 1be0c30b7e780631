"""
===============================================================================
USE CASE: Get Document
===============================================================================

Recupera un documento por id.

Reglas:
  - Documento inexistente -> NOT_FOUND (resultado normal, nunca excepción).
  - Sin actor: lookup interno, solo existencia.
  - Con actor: requiere rol efectivo (owner, readOnly o readWrite), si no FORBIDDEN.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ...domain.document_policy import DocumentActor, can_view_document
from ...domain.repositories import DocumentRepository
from .document_access import forbidden_error, not_found_error
from .document_results import DocumentResult


class GetDocumentUseCase:
    def __init__(self, document_repository: DocumentRepository) -> None:
        self._documents = document_repository

    def execute(
        self, document_id: UUID, actor: DocumentActor | None = None
    ) -> DocumentResult:
        document = self._documents.get_document(document_id)
        if document is None:
            return DocumentResult(error=not_found_error())

        if actor is not None and not can_view_document(document, actor):
            return DocumentResult(error=forbidden_error())

        return DocumentResult(document=document)
