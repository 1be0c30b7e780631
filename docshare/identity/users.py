"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelo de Usuario (directorio)

Responsabilidades:
    - Definir el dataclass User expuesto por el directorio de usuarios.
    - Normalizar emails en el borde de identidad.

Colaboradores:
    - domain.repositories.UserDirectory: devuelve User.
    - infrastructure/repositories/*/user.py: mapean filas -> User.
    - identity/auth_users.py: valida que el sujeto del token exista.

Notas:
    - Este módulo NO contiene lógica de negocio: solo “shapes” de datos.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class User:
    """Usuario registrado (solo lectura para el control de acceso)."""

    id: UUID
    email: str
    created_at: datetime | None = None


def normalize_email(email: str | None) -> str:
    """Trim + lower: el directorio guarda emails normalizados."""
    return (email or "").strip().lower()
