"""
Name: DocShare FastAPI application

Responsibilities:
  - Build the ASGI app (create_app) and expose the module-level `app`
  - Own the DB pool lifecycle (skipped when APP_ENV is a test env)
  - Wire request context, CORS, problem+json handlers and the /v1 router
  - Serve /healthz (document store ping) and /metrics (Prometheus)

Collaborators:
  - crosscutting.config.Settings
  - infrastructure.db.pool
  - interfaces.api.http.router
  - container.get_document_repository (health ping)
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..container import get_document_repository
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers

OPENAPI_TAGS = [
    {"name": "documents", "description": "Documents owned by or shared with the caller"},
    {"name": "roles", "description": "Role assignments (owner only)"},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    owns_pool = not settings.is_test()
    if owns_pool:
        settings.validate_pool_params()
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )
    logger.info(
        "docshare listo",
        extra={
            "app_env": settings.app_env,
            "pool": owns_pool,
            "role_lookup_max_workers": settings.role_lookup_max_workers,
        },
    )
    try:
        yield
    finally:
        if owns_pool:
            close_pool()
        logger.info("docshare detenido")


def healthz(request: Request) -> dict:
    """Liveness plus a ping to the document store."""
    db_ok = get_document_repository().ping()
    if not db_ok:
        logger.warning("healthz: document store no responde")
    return {
        "ok": db_ok,
        "db": "connected" if db_ok else "disconnected",
        "request_id": getattr(request.state, "request_id", None),
    }


def metrics() -> Response:
    body, content_type = get_metrics_response()
    return Response(content=body, media_type=content_type)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    application = FastAPI(
        title="DocShare API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    application.state.settings = settings

    # Starlette ejecuta primero el último middleware agregado (CORS).
    application.add_middleware(RequestContextMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    application.include_router(router, prefix="/v1")
    application.add_api_route("/healthz", healthz, methods=["GET"], tags=["ops"])
    application.add_api_route(
        "/metrics", metrics, methods=["GET"], tags=["ops"], include_in_schema=False
    )
    register_exception_handlers(application)
    return application


app = create_app()
