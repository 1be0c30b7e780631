"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/document.py
============================================================
Class: InMemoryDocumentRepository

Responsibilities:
  - Almacenar documentos y sus listas de rol en memoria (tests / local dev).
  - Replicar la semántica del repo Postgres: move atómico entre roles,
    dedupe, orden determinístico.

Collaborators:
  - domain.repositories.DocumentRepository (contrato)
  - domain.entities.Document, DocumentRole

Constraints / Notes:
  - Thread-safe: Lock protege el diccionario interno.
  - Repo puro: NO decide ownership, sólo persiste/retorna datos.
  - Copias defensivas: el caller nunca recibe las listas internas.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import Document, DocumentRole


class InMemoryDocumentRepository:
    """
    Repositorio in-memory, thread-safe, para documentos.

    Modelo mental:
    - _documents actúa como tabla: document_id -> Document
    - Las listas de rol viven dentro del Document (igual que los arrays en Postgres).
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._documents: Dict[UUID, Document] = {}

    @staticmethod
    def _copy(document: Document) -> Document:
        return replace(
            document,
            read_only_user_ids=list(document.read_only_user_ids),
            read_write_user_ids=list(document.read_write_user_ids),
        )

    @staticmethod
    def _other_role(role: DocumentRole) -> DocumentRole:
        if role == DocumentRole.READ_ONLY:
            return DocumentRole.READ_WRITE
        if role == DocumentRole.READ_WRITE:
            return DocumentRole.READ_ONLY
        raise ValueError(f"Role {role.value} is not stored on documents")

    # =========================================================
    # API del repositorio
    # =========================================================
    def create_document(self, document: Document) -> Document:
        stored = self._copy(document)
        stored.read_only_user_ids = []
        stored.read_write_user_ids = []
        stored.touch_created()
        with self._lock:
            self._documents[stored.id] = stored
            return self._copy(stored)

    def get_document(self, document_id: UUID) -> Optional[Document]:
        with self._lock:
            document = self._documents.get(document_id)
            return self._copy(document) if document else None

    def get_document_by_name_and_owner(
        self, name: str, owner_user_id: UUID
    ) -> Optional[Document]:
        with self._lock:
            matches = [
                doc
                for doc in self._documents.values()
                if doc.name == name and doc.owner_user_id == owner_user_id
            ]
        if not matches:
            return None
        matches.sort(key=lambda doc: (doc.created_at, str(doc.id)))
        return self._copy(matches[0])

    def list_documents_visible_to(self, user_id: UUID) -> List[Document]:
        with self._lock:
            visible = [
                self._copy(doc)
                for doc in self._documents.values()
                if doc.owner_user_id == user_id
                or user_id in doc.read_only_user_ids
                or user_id in doc.read_write_user_ids
            ]
        visible.sort(key=lambda doc: (doc.created_at, str(doc.id)))
        return visible

    def delete_document(self, document_id: UUID) -> bool:
        with self._lock:
            return self._documents.pop(document_id, None) is not None

    def add_to_role_set(
        self, document_id: UUID, role: DocumentRole, user_id: UUID
    ) -> bool:
        other = self._other_role(role)
        with self._lock:
            document = self._documents.get(document_id)
            if document is None:
                return False
            target_ids = document.role_members(role)
            other_ids = document.role_members(other)

            changed = False
            if user_id in other_ids:
                other_ids.remove(user_id)
                changed = True
            if user_id not in target_ids:
                target_ids.append(user_id)
                changed = True
            return changed

    def remove_from_role_set(
        self, document_id: UUID, role: DocumentRole, user_id: UUID
    ) -> bool:
        self._other_role(role)
        with self._lock:
            document = self._documents.get(document_id)
            if document is None:
                return False
            members = document.role_members(role)
            if user_id not in members:
                return False
            members.remove(user_id)
            return True

    def ping(self) -> bool:
        return True
