"""
Stock opname HTTP application.

``create_app`` wires middleware, exception handlers and routers; the
lifespan migrates the database before the first request and releases the
connection pool at shutdown.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockopname.api.middleware import (
    ErrorHandlerMiddleware,
    LoggingMiddleware,
    setup_exception_handlers,
)
from stockopname.api.routes import (
    auth_router,
    health_router,
    items_router,
    locations_router,
    reports_router,
    sessions_router,
    users_router,
)
from stockopname.config import Settings, configure_logging, get_logger, get_settings
from stockopname.core.exceptions import DatabaseError
from stockopname.infrastructure.storage.sqlite import close_pool, get_pool
from stockopname.infrastructure.storage.sqlite.migrations import initialize_database

logger = get_logger(__name__)

ROUTERS = (
    health_router,
    auth_router,
    users_router,
    locations_router,
    sessions_router,
    items_router,
    reports_router,
)


async def prepare_database(settings: Settings) -> None:
    """Apply pending migrations, then open the shared pool."""
    results = await initialize_database(
        settings.storage.db_path,
        create_backup_before=settings.storage.backup_on_migrate,
    )
    failed = [f"v{r.version}" for r in results if not r.success]
    if failed:
        raise DatabaseError("migrate", f"failed migrations: {', '.join(failed)}")
    pool = await get_pool()
    logger.info("database_ready", migrations_applied=len(results), pool_size=pool.pool_size)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(settings)
    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        db_path=str(settings.storage.db_path),
    )

    await prepare_database(settings)
    try:
        yield
    finally:
        await close_pool()
        logger.info("application_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Stock opname sessions, item counts and session reports",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    setup_exception_handlers(app)

    for router in ROUTERS:
        app.include_router(router)

    # Container liveness probe; no database access
    @app.get("/health", tags=["health"])
    async def root_health() -> dict[str, str]:
        return {"status": "healthy", "version": settings.app_version}

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn (``stockopname-api`` console script)."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "stockopname.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
