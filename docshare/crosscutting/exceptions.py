"""
===============================================================================
CRC CARD — crosscutting/exceptions.py
===============================================================================

Componente:
  DocShareError / PersistenceError

Responsabilidades:
  - Representar fallas de infraestructura que abortan un request completo
    (DB caída, pool sin inicializar, timeout).
  - Llevar error_code estable y error_id para cruzar respuesta HTTP con logs.

Fuera de alcance:
  - Documento inexistente, actor sin permisos, rol inválido: eso viaja como
    DocumentError dentro del Result de cada caso de uso.

Colaboradores:
  - infrastructure/repositories/postgres: lanzan PersistenceError
  - api/exception_handlers.py: los traduce a RFC7807 (500)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class DocShareError(Exception):
    error_code: str = "DOCSHARE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        error_id: str | None = None,
        original_error: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_id = error_id or uuid4().hex
        self.original_error = original_error

    def __str__(self) -> str:
        return f"[{self.error_code}:{self.error_id}] {self.message}"


class PersistenceError(DocShareError):
    """El store de documentos o el directorio de usuarios no respondió."""

    error_code: str = "PERSISTENCE_ERROR"
