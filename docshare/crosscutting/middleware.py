"""
===============================================================================
CRC CARD — crosscutting/middleware.py
===============================================================================

Clase:
  RequestContextMiddleware (Starlette)

Responsabilidades:
  - Aceptar X-Request-Id entrante (si es razonable) o generar uno nuevo.
  - Exponerlo en request.state y en docshare.context durante el request.
  - Devolverlo en la respuesta.
  - Medir latencia, registrar métricas HTTP y loguear el cierre del request
    (salvo /healthz y /metrics).

Colaboradores:
  - docshare/context.py
  - crosscutting/metrics.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..context import bind_request_context, reset_request_context
from .logger import logger
from .metrics import record_request_metrics

REQUEST_ID_HEADER = "X-Request-Id"
_MAX_REQUEST_ID_LEN = 128
_UNLOGGED_PATHS = frozenset({"/healthz", "/metrics"})


def _pick_request_id(incoming: str | None) -> str:
    candidate = (incoming or "").strip()
    if candidate and len(candidate) <= _MAX_REQUEST_ID_LEN and candidate.isprintable():
        return candidate
    return uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = _pick_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        token = bind_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            elapsed = time.perf_counter() - started
            record_request_metrics(
                endpoint=request.url.path,
                method=request.method,
                status_code=status_code,
                latency_seconds=elapsed,
            )
            if request.url.path not in _UNLOGGED_PATHS:
                log = logger.warning if status_code >= 500 else logger.info
                log(
                    "request completado",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(elapsed * 1000, 2),
                    },
                )
            reset_request_context(token)
