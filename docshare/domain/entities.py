"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Document, DocumentRole, VisibleDocument, RoleAssignment)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos para mantener invariantes simples.
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - domain.document_policy: decide ownership y rol efectivo.
    - application/usecases: construyen/consumen estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Admin nunca se persiste: es un rol calculado a partir del owner.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


class DocumentRole(str, Enum):
    """
    Rol de un usuario sobre un documento.

    - ADMIN: owner del documento (calculado, nunca almacenado).
    - READ_ONLY / READ_WRITE: roles otorgados, almacenados como membresía.
    """

    ADMIN = "Admin"
    READ_ONLY = "readOnly"
    READ_WRITE = "readWrite"

    @property
    def is_grantable(self) -> bool:
        return self in GRANTABLE_ROLES


GRANTABLE_ROLES = frozenset({DocumentRole.READ_ONLY, DocumentRole.READ_WRITE})


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


@dataclass
class Document:
    """
    Documento compartible.

    Importante:
      - owner_user_id es inmutable y nunca aparece en las listas de roles.
      - Un user_id aparece como máximo una vez entre ambas listas.
    """

    id: UUID
    name: str
    owner_user_id: UUID
    description: str = ""
    read_only_user_ids: List[UUID] = field(default_factory=list)
    read_write_user_ids: List[UUID] = field(default_factory=list)
    created_at: Optional[datetime] = None

    def role_members(self, role: DocumentRole) -> List[UUID]:
        """Lista almacenada para un rol otorgable."""
        if role == DocumentRole.READ_ONLY:
            return self.read_only_user_ids
        if role == DocumentRole.READ_WRITE:
            return self.read_write_user_ids
        raise ValueError(f"Role {role.value} is not stored on documents")

    def touch_created(self, *, at: datetime | None = None) -> None:
        """Asigna created_at si todavía no fue seteado."""
        if self.created_at is None:
            self.created_at = at or _utcnow()


# ---------------------------------------------------------------------------
# Read models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VisibleDocument:
    """Documento visible para un usuario junto con su rol efectivo."""

    document_id: UUID
    name: str
    description: str
    role: DocumentRole


@dataclass(frozen=True)
class RoleAssignment:
    """Par (rol, email) de un documento, tal como se muestra al owner."""

    role: DocumentRole
    email: str
