"""
DualPost Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, store construction,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn dualpost.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  Req ID      │→│  Logging     │→│  CORS       │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────┐ ┌─────────────────────┐       │
    │  │ /api/posts/pg    │ │ /api/posts/mongo    │       │
    │  └──────────────────┘ └─────────────────────┘       │
    │  ┌──────────┐ ┌──────────┐ ┌───────────────────┐    │
    │  │ GET /    │ │ /health  │ │ static (public/)  │    │
    │  └──────────┘ └──────────┘ └───────────────────┘    │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ PostNotFound→404 │ StorageError→500 │ *→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the SQLAlchemy engine and the Motor client
    3. Create the posts table if missing (PG_CREATE_TABLES)
    4. Attach both stores to app.state
    5. Log reachability of each store (non-fatal)

    Shutdown:
    1. Dispose the SQLAlchemy engine
    2. Close the Motor client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from dualpost import __version__
from dualpost.config import Settings, settings as default_settings
from dualpost.database import (
    create_engine,
    create_session_factory,
    create_tables,
    dispose_engine,
)
from dualpost.dependencies import get_mongo_store, get_pg_store
from dualpost.exceptions import DualPostError, PostNotFoundError, StorageError
from dualpost.middleware.logging import RequestLoggingMiddleware
from dualpost.middleware.request_id import RequestIDMiddleware, request_id_var
from dualpost.mongo import close_mongo_client, create_mongo_client, get_posts_collection
from dualpost.routes import health, pages
from dualpost.routes.posts import build_posts_router
from dualpost.services.mongo_store import MongoPostStore
from dualpost.services.pg_store import PostgresPostStore

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = {"error": "Post not found"}
SERVER_ERROR_BODY = {"error": "Internal Server Error"}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(app_settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] dualpost.services.pg_store: Created post 7 in postgres
    """
    logging.basicConfig(
        level=getattr(logging, app_settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the storage clients on startup and release them on shutdown.

    The engine and the Motor client are the only shared resources in the
    process. They are created here, wrapped in their stores, and reach the
    route handlers through app.state and the dependencies in dependencies.py.

    A store that cannot be reached at startup is logged, not fatal: the other
    backend keeps serving, and the unreachable one answers 500 until it
    comes back.
    """
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings)
    logger.info("=" * 60)
    logger.info("DualPost Backend %s starting up...", __version__)

    engine = create_engine(app_settings)
    session_factory = create_session_factory(engine)
    mongo_client = create_mongo_client(app_settings)

    app.state.pg_store = PostgresPostStore(engine, session_factory)
    app.state.mongo_store = MongoPostStore(get_posts_collection(mongo_client, app_settings))

    if app_settings.pg_create_tables:
        try:
            await create_tables(engine)
        except Exception as e:
            logger.error("Could not create the posts table: %s", str(e))

    if await app.state.pg_store.health_check():
        logger.info("Connected to PostgreSQL")
    else:
        logger.error("Error connecting to PostgreSQL")

    if await app.state.mongo_store.health_check():
        logger.info("Connected to MongoDB")
    else:
        logger.error("Error connecting to MongoDB")

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("DualPost Backend shutting down...")
    await dispose_engine(engine)
    close_mongo_client(mongo_client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for the two caller-visible error kinds.

    Handler hierarchy:
        PostNotFoundError → 404 {"error": "Post not found"}
        StorageError      → 500 {"error": "Internal Server Error"}
        DualPostError     → 500 (catch-all for custom)
        Exception         → 500 (unexpected errors)

    Bodies are fixed strings. The underlying diagnostic is logged with the
    request ID and never sent to the client.
    """

    @app.exception_handler(PostNotFoundError)
    async def handle_not_found(request: Request, exc: PostNotFoundError):
        """Requested post doesn't exist."""
        rid = request_id_var.get("")
        logger.info("[%s] %s", rid, exc.message)
        return JSONResponse(status_code=404, content=NOT_FOUND_BODY)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        """Storage failure: generic message to the client, details logged."""
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content=SERVER_ERROR_BODY)

    @app.exception_handler(DualPostError)
    async def handle_app_error(request: Request, exc: DualPostError):
        """Any other DualPostError subclass without a handler of its own."""
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content=SERVER_ERROR_BODY)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Stack trace is logged server-side only.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content=SERVER_ERROR_BODY)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Configuration to use; defaults to the environment-loaded
            singleton. The lifespan reads it from app.state.settings.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="DualPost API",
        description=(
            "CRUD over a single post resource, persisted to PostgreSQL under "
            "/api/posts/pg and to MongoDB under /api/posts/mongo."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = first to run)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(pages.router)
    app.include_router(build_posts_router("pg", get_pg_store))
    app.include_router(build_posts_router("mongo", get_mongo_store))
    app.include_router(health.router)

    # Mounted last so every route above takes precedence over file lookups
    app.mount("/", StaticFiles(directory=app_settings.static_dir, html=True), name="static")

    return app


# uvicorn expects `dualpost.main:app` to be importable
app = create_app()

