"""
===============================================================================
CRC — interfaces/api/http/error_mapping.py
===============================================================================

Responsabilidades:
  - Convertir el DocumentError de un Result en la AppHTTPException que le
    corresponde (problem+json vía handlers de la app).

Tabla:
  NOT_FOUND -> 404 · FORBIDDEN -> 403 · VALIDATION_ERROR -> 422
  Un código desconocido se trata como 422.

Colaboradores:
  - application.usecases.DocumentError / DocumentErrorCode
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import Callable, NoReturn

from docshare.application.usecases import DocumentError, DocumentErrorCode
from docshare.crosscutting.error_responses import (
    AppHTTPException,
    forbidden,
    not_found,
    validation_error,
)

_FACTORIES: dict[DocumentErrorCode, Callable[[str], AppHTTPException]] = {
    DocumentErrorCode.NOT_FOUND: not_found,
    DocumentErrorCode.FORBIDDEN: forbidden,
    DocumentErrorCode.VALIDATION_ERROR: validation_error,
}


def raise_document_error(error: DocumentError) -> NoReturn:
    factory = _FACTORIES.get(error.code, validation_error)
    raise factory(error.message)
