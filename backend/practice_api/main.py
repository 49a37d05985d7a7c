"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from practice_api.models import Base
from practice_api.routers import ROUTERS
from practice_common.config.logging import rest_api_logger as logger, setup_logging
from practice_common.config.settings import settings
from practice_common.infrastructure.correlation import CorrelationIdMiddleware
from practice_common.infrastructure.db import build_engine, build_session_factory


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    # Initialize logging
    setup_logging()

    config_errors = settings.validate_production_settings()
    if config_errors:
        for error in config_errors:
            logger.error("Configuration error", error=error)
        if settings.environment == "production":
            raise RuntimeError(
                f"Production configuration errors: {'; '.join(config_errors)}. "
                "Server will not start with insecure configuration."
            )
        else:
            logger.warning("Running with insecure defaults (acceptable for development only)")

    # Startup
    logger.info("Starting REST API", port=settings.rest_api_port, env=settings.environment)

    # Tests install their own session factory before startup
    owns_engine = getattr(app.state, "session_factory", None) is None
    if owns_engine:
        engine = build_engine(settings.database_url, echo=settings.sql_echo)
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)

        if settings.create_tables_on_startup:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created/verified")

    yield

    # Shutdown
    logger.info("Shutting down REST API")
    if owns_engine:
        app.state.engine.dispose()
        app.state.session_factory = None


# Create FastAPI application
app = FastAPI(
    title="Practice REST API",
    description="Multi-tenant practice management API",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

# Correlation IDs for request tracing
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# Error Handlers
# =============================================================================


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Constraint violations (duplicate keys, missing references) become 409."""
    logger.warning("Integrity error", path=request.url.path, error=str(exc.orig))
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Conflicting or invalid reference in request data"},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error", path=request.url.path, error=str(exc), exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Database unavailable"},
    )


# =============================================================================
# Routers
# =============================================================================

for router in ROUTERS:
    app.include_router(router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("practice_api.main:app", host="0.0.0.0", port=settings.rest_api_port)
