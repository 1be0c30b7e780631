"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/document.py
============================================================
Class: PostgresDocumentRepository

Responsibilities:
- Implementar DocumentRepository en PostgreSQL (SQL crudo, psycopg 3).
- Persistir roles como arrays embebidos (read_only_user_ids / read_write_user_ids).
- Mutaciones de rol en UN solo UPDATE (atomicidad por documento).
- Lookup de visibilidad: owner OR miembro de cualquiera de los arrays.

Collaborators:
- psycopg_pool.ConnectionPool
- crosscutting.exceptions.PersistenceError
- crosscutting.logger.logger
- Tabla: documents (ver alembic/versions/001_documents.py)

Constraints / Notes:
- Repo puro: NO aplica reglas de negocio (ownership vive en domain/application).
- Todas las queries parametrizadas; los nombres de columna salen de
  _ROLE_COLUMNS (constantes), nunca de input.
- Orden determinístico: created_at ASC, id ASC.
============================================================
"""

from __future__ import annotations

from typing import Mapping, Optional
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import PersistenceError
from ....crosscutting.logger import logger
from ....domain.entities import Document, DocumentRole

_DOCUMENT_COLUMNS = (
    "id, name, description, owner_user_id, "
    "read_only_user_ids, read_write_user_ids, created_at"
)
_DOCUMENT_ORDER_BY = "created_at ASC, id ASC"

# rol -> (columna destino, columna opuesta)
_ROLE_COLUMNS: dict[DocumentRole, tuple[str, str]] = {
    DocumentRole.READ_ONLY: ("read_only_user_ids", "read_write_user_ids"),
    DocumentRole.READ_WRITE: ("read_write_user_ids", "read_only_user_ids"),
}


def _add_to_role_sql(target: str, other: str) -> str:
    # No-op (0 filas) si el usuario ya está en target y no en other.
    return f"""
        UPDATE documents
        SET {target} = CASE
                WHEN %(user_id)s::uuid = ANY({target}) THEN {target}
                ELSE array_append({target}, %(user_id)s::uuid)
            END,
            {other} = array_remove({other}, %(user_id)s::uuid)
        WHERE id = %(document_id)s
          AND (
            NOT (%(user_id)s::uuid = ANY({target}))
            OR %(user_id)s::uuid = ANY({other})
          )
        RETURNING id
    """


def _remove_from_role_sql(target: str) -> str:
    return f"""
        UPDATE documents
        SET {target} = array_remove({target}, %(user_id)s::uuid)
        WHERE id = %(document_id)s
          AND %(user_id)s::uuid = ANY({target})
        RETURNING id
    """


def _row_to_document(row: tuple) -> Document:
    return Document(
        id=row[0],
        name=row[1],
        description=row[2] or "",
        owner_user_id=row[3],
        read_only_user_ids=list(row[4] or []),
        read_write_user_ids=list(row[5] or []),
        created_at=row[6],
    )


class PostgresDocumentRepository:
    """
    Repositorio PostgreSQL para documentos y sus roles embebidos.

    Modelo mental:
    - Una fila por documento; los roles son arrays de uuid en la misma fila.
    - Borrar la fila elimina todas las asignaciones de rol.
    """

    _SQL_INSERT = f"""
        INSERT INTO documents (id, name, description, owner_user_id, created_at)
        VALUES (
            %(id)s, %(name)s, %(description)s, %(owner_user_id)s,
            COALESCE(%(created_at)s, now())
        )
        RETURNING {_DOCUMENT_COLUMNS}
    """

    _SQL_GET = f"""
        SELECT {_DOCUMENT_COLUMNS}
        FROM documents
        WHERE id = %(document_id)s
    """

    _SQL_GET_BY_NAME_AND_OWNER = f"""
        SELECT {_DOCUMENT_COLUMNS}
        FROM documents
        WHERE name = %(name)s AND owner_user_id = %(owner_user_id)s
        ORDER BY {_DOCUMENT_ORDER_BY}
        LIMIT 1
    """

    _SQL_LIST_VISIBLE = f"""
        SELECT {_DOCUMENT_COLUMNS}
        FROM documents
        WHERE owner_user_id = %(user_id)s
           OR read_only_user_ids @> ARRAY[%(user_id)s::uuid]
           OR read_write_user_ids @> ARRAY[%(user_id)s::uuid]
        ORDER BY {_DOCUMENT_ORDER_BY}
    """

    _SQL_DELETE = "DELETE FROM documents WHERE id = %(document_id)s RETURNING id"

    _SQL_PING = "SELECT 1"

    _SQL_ADD_TO_ROLE = {
        role: _add_to_role_sql(target, other)
        for role, (target, other) in _ROLE_COLUMNS.items()
    }

    _SQL_REMOVE_FROM_ROLE = {
        role: _remove_from_role_sql(target)
        for role, (target, _other) in _ROLE_COLUMNS.items()
    }

    def __init__(self, pool: Optional[ConnectionPool] = None):
        # Pool inyectable para tests. En prod se obtiene por factory global.
        self._pool = pool

    # =========================================================
    # Helpers (DRY + errores consistentes)
    # =========================================================
    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool
        from ...db.pool import get_pool

        return get_pool()

    def _fetchall(
        self, *, query: str, params: Mapping[str, object], context_msg: str
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, params).fetchall()
        except Exception as exc:
            logger.exception(context_msg, extra={"error": str(exc)})
            raise PersistenceError(f"{context_msg}: {exc}", original_error=exc) from exc

    def _fetchone(
        self, *, query: str, params: Mapping[str, object], context_msg: str
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, params).fetchone()
        except Exception as exc:
            logger.exception(context_msg, extra={"error": str(exc)})
            raise PersistenceError(f"{context_msg}: {exc}", original_error=exc) from exc

    @staticmethod
    def _require_grantable(role: DocumentRole) -> None:
        if role not in _ROLE_COLUMNS:
            raise ValueError(f"Role {role.value} is not stored on documents")

    # =========================================================
    # Public API
    # =========================================================
    def create_document(self, document: Document) -> Document:
        row = self._fetchone(
            query=self._SQL_INSERT,
            params={
                "id": document.id,
                "name": document.name,
                "description": document.description,
                "owner_user_id": document.owner_user_id,
                "created_at": document.created_at,
            },
            context_msg="PostgresDocumentRepository: Failed to create document",
        )
        if row is None:
            raise PersistenceError(
                "PostgresDocumentRepository: create_document returned no row"
            )
        return _row_to_document(row)

    def get_document(self, document_id: UUID) -> Optional[Document]:
        row = self._fetchone(
            query=self._SQL_GET,
            params={"document_id": document_id},
            context_msg="PostgresDocumentRepository: Failed to get document",
        )
        return _row_to_document(row) if row else None

    def get_document_by_name_and_owner(
        self, name: str, owner_user_id: UUID
    ) -> Optional[Document]:
        row = self._fetchone(
            query=self._SQL_GET_BY_NAME_AND_OWNER,
            params={"name": name, "owner_user_id": owner_user_id},
            context_msg="PostgresDocumentRepository: Failed to get document by name",
        )
        return _row_to_document(row) if row else None

    def list_documents_visible_to(self, user_id: UUID) -> list[Document]:
        rows = self._fetchall(
            query=self._SQL_LIST_VISIBLE,
            params={"user_id": user_id},
            context_msg="PostgresDocumentRepository: Failed to list visible documents",
        )
        return [_row_to_document(r) for r in rows]

    def delete_document(self, document_id: UUID) -> bool:
        row = self._fetchone(
            query=self._SQL_DELETE,
            params={"document_id": document_id},
            context_msg="PostgresDocumentRepository: Failed to delete document",
        )
        return row is not None

    def add_to_role_set(
        self, document_id: UUID, role: DocumentRole, user_id: UUID
    ) -> bool:
        self._require_grantable(role)
        row = self._fetchone(
            query=self._SQL_ADD_TO_ROLE[role],
            params={"document_id": document_id, "user_id": user_id},
            context_msg="PostgresDocumentRepository: Failed to add role",
        )
        return row is not None

    def remove_from_role_set(
        self, document_id: UUID, role: DocumentRole, user_id: UUID
    ) -> bool:
        self._require_grantable(role)
        row = self._fetchone(
            query=self._SQL_REMOVE_FROM_ROLE[role],
            params={"document_id": document_id, "user_id": user_id},
            context_msg="PostgresDocumentRepository: Failed to remove role",
        )
        return row is not None

    def ping(self) -> bool:
        try:
            with self._get_pool().connection() as conn:
                conn.execute(self._SQL_PING)
            return True
        except Exception as exc:
            logger.warning("PostgresDocumentRepository: ping failed", extra={"error": str(exc)})
            return False
