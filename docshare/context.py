"""
===============================================================================
CRC CARD — docshare/context.py
===============================================================================

Responsabilidades:
  - Guardar los datos de correlación del request en curso (request_id,
    método, path) en un ContextVar, visible para el logger sin pasarlo a mano.
  - bind/reset con token, de modo que requests concurrentes no se pisen.

Colaboradores:
  - crosscutting/middleware.py: bind_request_context / reset_request_context
  - crosscutting/logger.py: get_context_dict

Restricción:
  - El actor autenticado NO vive acá: viaja como DocumentActor a cada caso de uso.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class RequestContext:
    request_id: str = ""
    method: str = ""
    path: str = ""


_EMPTY = RequestContext()
_request_context: ContextVar[RequestContext] = ContextVar(
    "docshare_request_context", default=_EMPTY
)


def bind_request_context(
    *, request_id: str, method: str = "", path: str = ""
) -> Token[RequestContext]:
    return _request_context.set(
        RequestContext(request_id=request_id, method=method, path=path)
    )


def reset_request_context(token: Token[RequestContext]) -> None:
    _request_context.reset(token)


def get_context_dict() -> dict[str, str]:
    """Campos no vacíos del contexto actual (para enriquecer logs)."""
    return {k: v for k, v in asdict(_request_context.get()).items() if v}
