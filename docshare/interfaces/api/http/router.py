"""
===============================================================================
TARJETA CRC — interfaces/api/http/router.py (Router raíz v1)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por feature.

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.documents

Notas:
  - Este router se incluye desde docshare/api/main.py con prefix="/v1".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.documents import router as documents_router


def build_router() -> APIRouter:
    """Construye el router raíz v1 (sin side-effects al importar)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
    api_router.include_router(documents_router)
    return api_router


router = build_router()

__all__ = ["router", "build_router"]
