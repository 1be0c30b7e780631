"""
===============================================================================
TARJETA CRC — schemas/documents.py
===============================================================================

Módulo:
    Schemas HTTP para Documentos y Roles

Responsabilidades:
    - Definir DTOs de request/response para endpoints de documentos.
    - Validar campos (name/description/email) con límites desde settings.
    - Mantener contratos estables y fáciles de versionar.

Colaboradores:
    - domain.entities.DocumentRole
    - crosscutting.config.get_settings (límites)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from docshare.crosscutting.config import get_settings
from docshare.domain.entities import DocumentRole
from pydantic import BaseModel, Field, field_validator

_settings = get_settings()


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateDocumentReq(BaseModel):
    """Request para crear documento."""

    name: Annotated[
        str,
        Field(
            ...,
            min_length=1,
            max_length=_settings.max_name_chars,
            description="Nombre del documento",
        ),
    ]
    description: str | None = Field(
        default=None,
        max_length=_settings.max_description_chars,
        description="Descripción del documento",
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None


class RoleChangeReq(BaseModel):
    """Request para otorgar / revocar un rol por email."""

    email: str = Field(..., min_length=1, max_length=320, description="Email del usuario")
    role: DocumentRole = Field(..., description="readOnly | readWrite")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class DocumentRes(BaseModel):
    id: UUID
    name: str
    description: str
    owner_user_id: UUID
    created_at: datetime | None = None


class VisibleDocumentRes(BaseModel):
    document_id: UUID
    name: str
    description: str
    role: DocumentRole


class VisibleDocumentsRes(BaseModel):
    documents: list[VisibleDocumentRes]


class RoleAssignmentRes(BaseModel):
    role: DocumentRole
    email: str


class RoleAssignmentsRes(BaseModel):
    document_id: UUID
    assignments: list[RoleAssignmentRes]


class RoleChangeRes(BaseModel):
    document_id: UUID
    email: str
    role: DocumentRole
    changed: bool
