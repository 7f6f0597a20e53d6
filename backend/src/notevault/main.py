# Main application entry point
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api import auth_router, health_router, notes_router
from .config import get_settings
from .core.exceptions import NoteVaultError, UnauthenticatedError
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import get_redis_client
from .core.schemas.common import ErrorResponse
from .core.services.session_service import SessionManager
from .database import AsyncSessionLocal, create_tables

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


async def _connect_redis() -> None:
    try:
        await get_redis_client().connect()
    except Exception as e:
        logger.warning("Redis unavailable, login throttling disabled", extra={"exception_type": type(e).__name__})


async def _prepare_database() -> None:
    """Create tables and drop sessions that expired while we were down."""
    # tests run against their own SQLite engine
    if os.getenv("NOTEVAULT_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping database setup (NOTEVAULT_SKIP_LIFESPAN_DB=1)")
        return

    try:
        await create_tables()
    except Exception as e:
        logger.error("Failed to create database tables", exc_info=e)
        raise

    if settings.purge_expired_sessions_on_startup:
        async with AsyncSessionLocal() as session:
            await SessionManager(session, settings).purge_expired()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting NoteVault",
        extra={"version": __version__, "environment": settings.environment, "debug": settings.debug},
    )
    await _connect_redis()
    await _prepare_database()

    yield

    logger.info("Shutting down NoteVault")
    await get_redis_client().disconnect()


app = FastAPI(
    title=settings.app_name,
    description="Personal notes API with session-based authentication",
    version=__version__,
    lifespan=lifespan,
)


def _error_response(status_code: int, error: str, message: str, details=None, headers=None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"), headers=headers)


@app.exception_handler(NoteVaultError)
async def notevault_error_handler(request: Request, exc: NoteVaultError):
    """Render domain errors with their status and public message."""
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            extra={"error": exc.error, "path": request.url.path, "exception_type": type(exc).__name__},
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return _error_response(exc.status_code, exc.error, exc.message, exc.details, headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and params share the ValidationError shape."""
    # input values are left out, they may hold passwords
    errors = [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]
    return _error_response(422, "ValidationError", "Invalid input", {"errors": errors})


# Add logging middleware
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

for router in (auth_router, notes_router, health_router):
    app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "NoteVault API"}


@app.get("/api/")
async def api_root():
    """Entry points, for people poking at the API by hand."""
    return {
        "message": "NoteVault API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "authentication": "/api/auth/",
            "notes": "/api/notes/",
            "health": "/api/health/",
        },
    }


# unauthenticated liveness probe for load balancers
@app.get("/health")
async def liveness():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("notevault.main:app", host=settings.host, port=settings.port, reload=settings.reload)
