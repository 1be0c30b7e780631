"""
===============================================================================
CRC CARD — api/exception_handlers.py
===============================================================================

Responsabilidades:
  - Registrar en la app el mapeo excepción -> problem+json.
  - PersistenceError / DocShareError -> 500 con error_id (mensaje interno solo
    en logs).
  - Validación de FastAPI -> 422 VALIDATION_ERROR.
  - Cualquier otra excepción -> 500 INTERNAL_ERROR; el detalle solo se
    muestra fuera de producción.

Colaboradores:
  - crosscutting.error_responses: problem_response, handlers HTTP
  - crosscutting.exceptions: DocShareError / PersistenceError
  - crosscutting.logger
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    problem_response,
    request_validation_handler,
)
from ..crosscutting.exceptions import DocShareError, PersistenceError
from ..crosscutting.logger import logger

_PUBLIC_DETAIL = {
    ErrorCode.PERSISTENCE_ERROR: "Error de persistencia.",
    ErrorCode.INTERNAL_ERROR: "Error interno.",
}


async def docshare_error_handler(request: Request, exc: DocShareError) -> JSONResponse:
    code = (
        ErrorCode.PERSISTENCE_ERROR
        if isinstance(exc, PersistenceError)
        else ErrorCode.INTERNAL_ERROR
    )
    logger.error(
        "Request abortado por error interno",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "error": exc.message,
        },
    )
    return problem_response(
        request,
        code,
        _PUBLIC_DETAIL[code],
        errors=[{"error_id": exc.error_id}],
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Excepción no controlada", extra={"error": str(exc)})
    detail = (
        _PUBLIC_DETAIL[ErrorCode.INTERNAL_ERROR]
        if get_settings().is_production()
        else str(exc) or exc.__class__.__name__
    )
    return problem_response(request, ErrorCode.INTERNAL_ERROR, detail)


def register_exception_handlers(app: FastAPI) -> None:
    # Starlette resuelve por MRO: PersistenceError cae en el handler de DocShareError.
    app.add_exception_handler(DocShareError, docshare_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
