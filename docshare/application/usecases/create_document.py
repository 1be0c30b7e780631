"""
===============================================================================
USE CASE: Create Document
===============================================================================

Name:
    Create Document Use Case

Business Goal:
    Crear un documento nuevo cuyo owner es el actor que lo crea, con listas
    de rol vacías.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateDocumentUseCase

Responsibilities:
    - Validar actor presente.
    - Normalizar y validar name / description (no vacío, longitudes máximas).
    - Construir la entidad Document (id nuevo, owner = actor) y persistirla.

Collaborators:
    - DocumentRepository.create_document(document) -> Document
    - document_results: DocumentResult / DocumentError / DocumentErrorCode

Error Mapping:
    - FORBIDDEN: actor ausente
    - VALIDATION_ERROR: name vacío o demasiado largo, description demasiado larga
    - PersistenceError: se propaga (no es un error de negocio)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

from ...crosscutting.logger import logger
from ...domain.document_policy import DocumentActor
from ...domain.entities import Document
from ...domain.repositories import DocumentRepository
from .document_access import forbidden_error, validation_error
from .document_results import DocumentResult

DEFAULT_MAX_NAME_CHARS = 200
DEFAULT_MAX_DESCRIPTION_CHARS = 2000


@dataclass(frozen=True)
class CreateDocumentInput:
    name: str
    description: str | None = None
    actor: DocumentActor | None = None


class CreateDocumentUseCase:
    """
    Use Case (Application Service / Command):
        Crea un documento y deja al actor como owner (rol Admin calculado).
    """

    def __init__(
        self,
        repository: DocumentRepository,
        *,
        max_name_chars: int = DEFAULT_MAX_NAME_CHARS,
        max_description_chars: int = DEFAULT_MAX_DESCRIPTION_CHARS,
    ) -> None:
        self._documents = repository
        self._max_name_chars = max_name_chars
        self._max_description_chars = max_description_chars

    def execute(self, input_data: CreateDocumentInput) -> DocumentResult:
        actor = input_data.actor
        if actor is None or actor.user_id is None:
            return DocumentResult(
                error=forbidden_error("Actor is required to create document.")
            )

        name = (input_data.name or "").strip()
        if not name:
            return self._validation_error("Document name is required.")
        if len(name) > self._max_name_chars:
            return self._validation_error(
                f"Document name must be at most {self._max_name_chars} characters."
            )

        description = (input_data.description or "").strip()
        if len(description) > self._max_description_chars:
            return self._validation_error(
                "Document description must be at most "
                f"{self._max_description_chars} characters."
            )

        document = Document(
            id=uuid4(),
            name=name,
            description=description,
            owner_user_id=actor.user_id,
        )
        created = self._documents.create_document(document)

        logger.info(
            "Documento creado",
            extra={
                "document_id": str(created.id),
                "owner_user_id": str(created.owner_user_id),
            },
        )
        return DocumentResult(document=created)

    @staticmethod
    def _validation_error(message: str) -> DocumentResult:
        return DocumentResult(error=validation_error(message))
