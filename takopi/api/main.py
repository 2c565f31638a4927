"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Validate storage wiring at startup (fail-fast, no silent fallback)
  - Initialize the PostgreSQL pool only in remote storage mode
  - Configure middleware (CORS, request context)
  - Mount the v1 router and expose /healthz

Collaborators:
  - takopi.container: StorageMode, validate_storage_config, get_storage_mode
  - takopi.infrastructure.db.pool: init_pool / close_pool
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: v1 endpoints

Notes:
  - Middleware order matters: RequestContext -> CORS -> routes
  - /v1 prefix allows API versioning
  - /healthz follows Kubernetes health check convention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..container import StorageMode, get_storage_mode, validate_storage_config
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import build_router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates storage config and initializes pool."""
    settings = get_settings()
    mode = get_storage_mode()

    validate_storage_config(mode, settings)

    # Pool solo en modo remote (antes de cualquier uso de repositorios)
    if mode is StorageMode.REMOTE:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            slow_query_seconds=settings.db_slow_query_seconds,
        )

    try:
        logger.info(
            "Takopi API starting up",
            extra={
                "storage_mode": mode.value,
                "app_env": settings.app_env,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )
        yield
    finally:
        if mode is StorageMode.REMOTE:
            close_pool()
        logger.info("Takopi API shutting down")


def _get_allowed_origins() -> list[str]:
    """Get CORS origins from settings, with fallback for import-time errors."""
    try:
        return get_settings().get_allowed_origins_list()
    except ValueError:
        # Settings inválidos se reportan en el lifespan.
        return ["http://localhost:3000"]


def create_app() -> FastAPI:
    """Construye la app (factory: tests pueden crear instancias aisladas)."""
    app = FastAPI(
        title="Takopi API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "social", "description": "Follows, likes y pins"},
            {"name": "collections", "description": "Colecciones de contenidos"},
        ],
    )

    register_exception_handlers(app)

    # R: add_middleware apila: el último agregado ejecuta primero.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_get_allowed_origins(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-Id"],
        expose_headers=["X-Request-Id"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(build_router(), prefix="/v1")

    @app.get("/healthz", tags=["health"])
    def healthz() -> dict:
        """Liveness + modo de storage activo."""
        return {"ok": True, "storage_mode": get_storage_mode().value}

    return app


app = create_app()
