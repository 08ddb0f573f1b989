"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from game_reviews import __version__
from game_reviews.api import api_router
from game_reviews.config import get_settings
from game_reviews.database import async_session, create_tables
from game_reviews.errors import GameReviewsError, StorageError, UnauthenticatedError
from game_reviews.services.auth import AuthService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


async def bootstrap_admin() -> None:
    """Create the configured admin account if it does not exist yet."""
    async with async_session() as session:
        await AuthService(session, settings).ensure_admin(
            settings.admin_username, settings.admin_password
        )
        await session.commit()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - runs on startup and shutdown."""
    # Startup
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Database: %s", settings.database_url.split("///")[-1])  # Hide path details
    logger.info(
        "Policies: game ids=%s, game mutations admin only=%s, genre delete=%s, "
        "usernames case sensitive=%s, password scheme=%s",
        settings.game_id_assignment,
        settings.game_mutations_require_admin,
        settings.genre_delete_policy,
        settings.username_case_sensitive,
        settings.password_scheme,
    )

    # Validate and log warnings
    warnings = settings.validate_runtime_config()
    if warnings:
        logger.warning("Configuration warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    else:
        logger.info("Configuration validation passed - no warnings")

    await create_tables()
    if settings.admin_bootstrap_enabled:
        await bootstrap_admin()

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Application shutting down")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)


@app.exception_handler(GameReviewsError)
async def domain_error_handler(_request: Request, exc: GameReviewsError) -> JSONResponse:
    """Handle domain errors globally."""
    if isinstance(exc, StorageError):
        logger.error("Storage error: %s", exc.__cause__ or exc)

    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=headers,
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle storage failures that escaped the repositories."""
    logger.exception("Unexpected database error", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"message": StorageError.default_message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 422 with a readable message."""
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    summary = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
    return JSONResponse(
        status_code=422,
        content={"message": f"Request validation failed: {summary}", "errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) as messages."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


# Include API router
app.include_router(api_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the API is running."""
    return {"status": "healthy", "version": __version__}
