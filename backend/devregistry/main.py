"""
Developer Registry — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn devregistry.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌──────┐              │
    │  │  Req ID  │→│ Logging │→│ GZip │→│ CORS │              │
    │  └──────────┘ └─────────┘ └──────┘ └──────┘              │
    │                                                          │
    │  Routes:                                                 │
    │  ┌─────────┐ ┌──────────────────┐ ┌──────────────────┐   │
    │  │ /niveis │ │ /desenvolvedores │ │ GET /healthcheck │   │
    │  └─────────┘ └──────────────────┘ └──────────────────┘   │
    │                                                          │
    │  Exception Handlers:                                     │
    │  Validation→400 │ Integrity→401 │ NotFound/Fetch→404 │   │
    │  Connectivity→500                                        │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create tables (AUTO_CREATE_TABLES)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from devregistry import __version__
from devregistry.config import settings
from devregistry.database import dispose_engine, init_db
from devregistry.exceptions import (
    ConnectivityError,
    DevRegistryError,
    FetchError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from devregistry.middleware.logging import RequestLoggingMiddleware
from devregistry.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from devregistry.routes import developers, health, levels

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s

    The request ID comes from RequestIDLogFilter, attached to the stdout
    handler so records from every logger (ours and third-party) carry it.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging and schema creation. Shutdown: close the pool."""
    setup_logging()
    logger.info("Developer Registry %s starting up...", __version__)

    if settings.auto_create_tables:
        await init_db()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Developer Registry shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details=None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        ValidationError            → 400
        RequestValidationError     → 400 (malformed body, path or query)
        ReferentialIntegrityError  → 401
        NotFoundError              → 404
        FetchError                 → 404
        ConnectivityError          → 500
        DevRegistryError (base)    → 500
        Exception (fallback)       → 500

    Store failures never expose driver messages; their context is logged.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        problems = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
                "message": error.get("msg", ""),
            }
            for error in exc.errors()
        ]
        logger.warning("Malformed request: %s", problems)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", "Request is malformed", {"errors": problems}),
        )

    @app.exception_handler(ReferentialIntegrityError)
    async def handle_referential_integrity(request: Request, exc: ReferentialIntegrityError):
        return JSONResponse(
            status_code=401,
            content=_error_body("referential_integrity_error", exc.message, exc.context),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(FetchError)
    async def handle_fetch_error(request: Request, exc: FetchError):
        logger.error("Fetch error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=404,
            content=_error_body("fetch_error", exc.message),
        )

    @app.exception_handler(ConnectivityError)
    async def handle_connectivity_error(request: Request, exc: ConnectivityError):
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(DevRegistryError)
    async def handle_registry_error(request: Request, exc: DevRegistryError):
        logger.error("Unhandled application error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, exception handlers and routers."""
    app = FastAPI(
        title="Developer Registry API",
        description="Levels (niveis) and developers (desenvolvedores) registry.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(levels.router)
    app.include_router(developers.router)

    return app


app = create_app()
