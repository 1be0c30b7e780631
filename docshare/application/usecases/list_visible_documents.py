"""
===============================================================================
USE CASE: List Visible Documents
===============================================================================

Name:
    List Visible Documents Use Case

Business Goal:
    Listar todos los documentos donde el actor es owner o figura en alguna
    lista de rol, junto con su rol efectivo.

Why (Context / Intención):
    - El repo resuelve el "dónde aparece" (owner OR readOnly OR readWrite).
    - La policy resuelve el "con qué rol" (owner > readOnly > readWrite).
    - Separar ambas cosas evita duplicar la precedencia en SQL.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    ListVisibleDocumentsUseCase

Collaborators:
    - DocumentRepository.list_documents_visible_to(user_id)
    - domain.document_policy.effective_role
    - VisibleDocument (read model)
===============================================================================
"""

from __future__ import annotations

from ...domain.document_policy import DocumentActor, effective_role
from ...domain.entities import VisibleDocument
from ...domain.repositories import DocumentRepository
from .document_access import forbidden_error
from .document_results import VisibleDocumentListResult


class ListVisibleDocumentsUseCase:
    def __init__(self, document_repository: DocumentRepository) -> None:
        self._documents = document_repository

    def execute(self, actor: DocumentActor | None) -> VisibleDocumentListResult:
        if actor is None:
            return VisibleDocumentListResult(error=forbidden_error())

        visible: list[VisibleDocument] = []
        for document in self._documents.list_documents_visible_to(actor.user_id):
            role = effective_role(document, actor.user_id)
            # El repo puede devolver de más; la policy es la fuente de verdad.
            if role is None:
                continue
            visible.append(
                VisibleDocument(
                    document_id=document.id,
                    name=document.name,
                    description=document.description,
                    role=role,
                )
            )
        return VisibleDocumentListResult(documents=visible)
