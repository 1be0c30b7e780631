"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserDirectory

Responsibilities:
  - Directorio de usuarios en memoria para tests y dev local.
  - Permitir sembrar usuarios (add_user), ya que el alta real vive fuera del servicio.

Collaborators:
  - domain.repositories.UserDirectory (contrato)
  - identity.users.User / normalize_email

Constraints / Notes:
  - Thread-safe: el listado de roles resuelve emails en paralelo.
  - Email único (normalizado), igual que el UNIQUE de Postgres.
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional
from uuid import UUID, uuid4

from ....identity.users import User, normalize_email


class InMemoryUserDirectory:
    def __init__(self) -> None:
        self._lock = Lock()
        self._by_id: Dict[UUID, User] = {}
        self._id_by_email: Dict[str, UUID] = {}

    def add_user(self, email: str, *, user_id: UUID | None = None) -> User:
        """Registra un usuario. Falla si el email ya existe."""
        normalized = normalize_email(email)
        if not normalized:
            raise ValueError("email is required")
        user = User(id=user_id or uuid4(), email=normalized)
        with self._lock:
            if normalized in self._id_by_email:
                raise ValueError(f"email already registered: {normalized}")
            self._by_id[user.id] = user
            self._id_by_email[normalized] = user.id
        return user

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._id_by_email.get(normalize_email(email))
            return self._by_id.get(user_id) if user_id else None

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._by_id.get(user_id)
