"""
Notes Backend — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the database handle and token service (or accepts
       ones passed in), registers middleware, exception handlers and routes.
Who:   uvicorn imports `noteapp.main:app`; tests call create_app() with a
       SQLite-backed Database.
When:  Once at server startup.

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to the database (a failure aborts startup)
    3. Synchronize the schema when DB_SYNC_SCHEMA is on

    Shutdown:
    1. Dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from noteapp import __version__
from noteapp.config import Settings, settings
from noteapp.database import Database
from noteapp.exceptions import ConnectivityError
from noteapp.middleware.errors import register_exception_handlers
from noteapp.middleware.logging import RequestLoggingMiddleware
from noteapp.middleware.request_id import RequestIDMiddleware
from noteapp.routes import authors, blogs, health, login, notes, users
from noteapp.services.token_service import TokenService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    # passlib logs a traceback when probing newer bcrypt builds
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(config.log_level)
    logger.info("Notes backend %s starting up...", __version__)

    try:
        await database.connect()
    except ConnectivityError as e:
        logger.critical("%s (%s)", e.message, e.context.get("error"))
        await database.dispose()
        raise

    if config.db_sync_schema:
        await database.sync_schema()

    logger.info("Server ready at http://%s:%d", config.host, config.port)

    yield

    logger.info("Notes backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    database: Optional[Database] = None,
    token_service: Optional[TokenService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config:         Settings to use; defaults to the environment's.
        database:       Database handle; built from `config` when omitted.
        token_service:  Token signer/verifier; built from `config` when omitted.
    """
    config = config or settings

    app = FastAPI(
        title="Notes API",
        description="Users, notes and blogs with bearer-token authentication.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.database = database or Database(
        config.database_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=config.db_pool_pre_ping,
        echo=config.log_level == "DEBUG",
    )
    app.state.token_service = token_service or TokenService(
        secret=config.secret,
        algorithm=config.token_algorithm,
        expire_minutes=config.token_expire_minutes,
        shared_password=config.shared_password,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(blogs.router)
    app.include_router(users.router)
    app.include_router(login.router)
    app.include_router(authors.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve `app` on HOST:PORT from the environment."""
    import uvicorn

    uvicorn.run("noteapp.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
