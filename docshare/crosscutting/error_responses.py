"""
===============================================================================
CRC CARD — crosscutting/error_responses.py
===============================================================================

Componente:
  Problem Details (RFC 7807) para la API de documentos

Responsabilidades:
  - Catálogo cerrado de códigos (ErrorCode) con su status y título.
  - AppHTTPException: excepción HTTP que ya sabe su ErrorCode.
  - Factories usadas por auth y por el mapeo de DocumentError.
  - Renderizar cualquier error como application/problem+json, incluyendo
    request_id para correlación.

Colaboradores:
  - identity/auth_users.py: unauthorized()
  - interfaces/api/http/error_mapping.py: forbidden / not_found / validation_error
  - api/exception_handlers.py: errores internos y de validación de FastAPI
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"

    @property
    def status(self) -> int:
        return _STATUS_BY_CODE[self]

    @property
    def title(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def type_uri(self) -> str:
        return f"about:blank/{self.value.lower()}"


_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.PERSISTENCE_ERROR: 500,
}


class ErrorDetail(BaseModel):
    """Cuerpo problem+json. `code` es el contrato estable para clientes."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status: {
        "description": f"{title} (RFC7807)",
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {
                "schema": {"$ref": "#/components/schemas/ErrorDetail"}
            }
        },
    }
    for status, title in (
        (401, "Unauthorized"),
        (403, "Forbidden"),
        (404, "Not Found"),
        (422, "Validation Error"),
        (500, "Internal Error"),
    )
}


class AppHTTPException(HTTPException):
    def __init__(
        self,
        code: ErrorCode,
        detail: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=code.status, detail=detail, headers=headers)
        self.code = code
        self.errors = errors


# -----------------------------------------------------------------------------
# Factories
# -----------------------------------------------------------------------------
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(ErrorCode.VALIDATION_ERROR, detail, errors=errors)


def not_found(detail: str) -> AppHTTPException:
    return AppHTTPException(ErrorCode.NOT_FOUND, detail)


def forbidden(detail: str = "Acceso denegado") -> AppHTTPException:
    return AppHTTPException(ErrorCode.FORBIDDEN, detail)


def unauthorized(detail: str = "Autenticación requerida") -> AppHTTPException:
    return AppHTTPException(
        ErrorCode.UNAUTHORIZED, detail, headers={"WWW-Authenticate": "Bearer"}
    )


# -----------------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------------
def problem_response(
    request: Request,
    code: ErrorCode,
    detail: str,
    *,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Arma la respuesta problem+json y agrega request_id a `errors`."""
    request_id = getattr(request.state, "request_id", None)
    items = list(errors or [])
    if request_id:
        items.append({"request_id": request_id})

    body = ErrorDetail(
        type=code.type_uri,
        title=code.title,
        status=code.status,
        detail=detail,
        code=code,
        instance=str(request.url),
        errors=items or None,
    )
    return JSONResponse(
        status_code=code.status,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    return problem_response(
        request,
        exc.code,
        str(exc.detail),
        errors=exc.errors,
        headers=exc.headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Errores de body/query/path de FastAPI como VALIDATION_ERROR."""
    errors = [
        {
            "loc": ".".join(str(part) for part in err.get("loc", ())),
            "msg": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return problem_response(
        request, ErrorCode.VALIDATION_ERROR, "Request inválido.", errors=errors
    )
