"""
===============================================================================
USE CASE: Find Owned Document By Name
===============================================================================

Busca, entre los documentos que posee el actor, el más antiguo con ese nombre
exacto. Los documentos compartidos con el actor no participan del lookup.
===============================================================================
"""

from __future__ import annotations

from ...domain.document_policy import DocumentActor
from ...domain.repositories import DocumentRepository
from .document_access import forbidden_error, not_found_error
from .document_results import DocumentResult


class FindDocumentByNameUseCase:
    def __init__(self, document_repository: DocumentRepository) -> None:
        self._documents = document_repository

    def execute(self, name: str, actor: DocumentActor | None) -> DocumentResult:
        if actor is None:
            return DocumentResult(error=forbidden_error())

        normalized = (name or "").strip()
        if not normalized:
            return DocumentResult(error=not_found_error())

        document = self._documents.get_document_by_name_and_owner(
            normalized, actor.user_id
        )
        if document is None:
            return DocumentResult(error=not_found_error())
        return DocumentResult(document=document)
