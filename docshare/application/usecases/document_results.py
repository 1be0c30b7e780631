"""
===============================================================================
DOCUMENT USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Document Use Case Results

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    de documentos y roles, con un contrato estable y explícito para:
      - validaciones
      - autorización (solo el owner gestiona acceso)
      - recursos no encontrados (documento o email)

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      hacia afuera; la capa HTTP mapea code -> status.
    - Los fallos de infraestructura NO viajan acá: se propagan como
      PersistenceError.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    document_results models (module)

Responsibilities:
    - Definir DocumentErrorCode (NOT_FOUND / FORBIDDEN / VALIDATION_ERROR).
    - Representar DocumentError (code + message + resource).
    - Representar resultados:
        * DocumentResult (single document)
        * VisibleDocumentListResult (documentos visibles + rol)
        * RoleAssignmentListResult (pares rol/email)
        * RoleChangeResult (grant/revoke: changed flag)
        * DeleteDocumentResult (deleted flag)

Collaborators:
    - domain.entities.Document, VisibleDocument, RoleAssignment
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ...domain.entities import Document, RoleAssignment, VisibleDocument


class DocumentErrorCode(str, Enum):
    """
    Códigos de error de casos de uso de documentos.

      - VALIDATION_ERROR: input inválido (nombre vacío, rol Admin, email del owner).
      - FORBIDDEN: el actor no es owner (o no tiene rol para leer).
      - NOT_FOUND: documento inexistente o email no registrado.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class DocumentError:
    """
    Error de caso de uso.

    Campos:
      - code: categoría estable (DocumentErrorCode)
      - message: descripción humana
      - resource: recurso afectado ("Document" / "User"), opcional
    """

    code: DocumentErrorCode
    message: str
    resource: str | None = None


@dataclass
class DocumentResult:
    document: Document | None = None
    error: DocumentError | None = None


@dataclass
class VisibleDocumentListResult:
    documents: List[VisibleDocument] = field(default_factory=list)
    error: DocumentError | None = None


@dataclass
class RoleAssignmentListResult:
    """
    Asignaciones de rol de un documento.

    Orden: primero readOnly, luego readWrite (orden de inserción en cada lista).
    """

    assignments: List[RoleAssignment] = field(default_factory=list)
    error: DocumentError | None = None


@dataclass
class RoleChangeResult:
    """
    Resultado de grant/revoke.

    - changed=False con error None es un no-op válido (ya tenía el rol,
      o no estaba en el set al revocar).
    """

    changed: bool = False
    error: DocumentError | None = None


@dataclass
class DeleteDocumentResult:
    deleted: bool = False
    error: DocumentError | None = None
