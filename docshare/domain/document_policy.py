"""
===============================================================================
TARJETA CRC — domain/document_policy.py
===============================================================================

Módulo:
    Política de Acceso a Documentos (ownership / rol efectivo)

Responsabilidades:
    - Definir reglas puras de acceso a documentos (sin DB, sin FastAPI).
    - Separar "policy" de "repos" (repos solo traen datos, policy decide).
    - Ser 100% testeable: funciones puras, inputs explícitos.

Colaboradores:
    - domain.entities.Document, DocumentRole
    - application/usecases: resolve_owned_document y listados usan esta policy.

Reglas:
    - Solo el owner gestiona roles, lista asignaciones y elimina.
    - Rol efectivo: owner > readOnly > readWrite (desempate determinístico).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from .entities import Document, DocumentRole


@dataclass(frozen=True, slots=True)
class DocumentActor:
    """Identidad autenticada que ejecuta una operación."""

    user_id: UUID


def is_document_owner(document: Document, actor: DocumentActor | None) -> bool:
    """True si el actor es el owner del documento."""
    if actor is None:
        return False
    return document.owner_user_id == actor.user_id


def effective_role(document: Document, user_id: UUID) -> DocumentRole | None:
    """
    Rol efectivo de user_id sobre el documento, o None si no tiene acceso.

    Si por datos inconsistentes el usuario figura en ambas listas,
    gana readOnly.
    """
    if document.owner_user_id == user_id:
        return DocumentRole.ADMIN
    if user_id in document.read_only_user_ids:
        return DocumentRole.READ_ONLY
    if user_id in document.read_write_user_ids:
        return DocumentRole.READ_WRITE
    return None


def can_view_document(document: Document, actor: DocumentActor | None) -> bool:
    """Cualquier rol efectivo habilita lectura de metadata."""
    if actor is None:
        return False
    return effective_role(document, actor.user_id) is not None


def can_manage_roles(document: Document, actor: DocumentActor | None) -> bool:
    """Grant/revoke/list de roles: solo owner."""
    return is_document_owner(document, actor)


def can_delete_document(document: Document, actor: DocumentActor | None) -> bool:
    """Eliminación: solo owner."""
    return is_document_owner(document, actor)
