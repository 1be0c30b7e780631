"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserDirectory

Responsibilities:
  - Resolver usuarios registrados por email (grant/revoke) y por id (listado de roles, auth).
  - Ejecutar SQL parametrizado contra la tabla `users`.
  - Mapear filas crudas -> `User`.
  - Exponer fallos consistentes vía `PersistenceError` con logging estructurado.

Collaborators:
  - psycopg_pool.ConnectionPool
  - identity.users.User / normalize_email
  - crosscutting.logger.logger
  - crosscutting.exceptions.PersistenceError

Constraints / Notes:
  - Solo lectura: el alta de usuarios es responsabilidad de otro servicio.
  - Retorna None cuando no existe el usuario.
  - Emails se comparan normalizados (trim + lower).
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import PersistenceError
from ....crosscutting.logger import logger
from ....identity.users import User, normalize_email

_USER_COLUMNS = "id, email, created_at"


def _row_to_user(row: tuple) -> User:
    return User(id=row[0], email=row[1], created_at=row[2])


class PostgresUserDirectory:
    """Directorio de usuarios respaldado por PostgreSQL."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool
        from ...db.pool import get_pool

        return get_pool()

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object],
        log_msg: str,
        log_extra: dict[str, object],
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise PersistenceError(f"{log_msg}: {exc}", original_error=exc) from exc

    def get_user_by_email(self, email: str) -> Optional[User]:
        normalized = normalize_email(email)
        if not normalized:
            return None
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE lower(email) = %s",
            params=[normalized],
            log_msg="PostgresUserDirectory: Failed to load user by email",
            log_extra={},
        )
        return _row_to_user(row) if row else None

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=[user_id],
            log_msg="PostgresUserDirectory: Failed to load user by id",
            log_extra={"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None
