"""
Acaia Club Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes database construction, middleware registration, route
       mounting and lifecycle management in one place.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance that owns its own Database handle.
Who:   Called by uvicorn (uvicorn acaiaclub.main:app) and by the test suite,
       which passes SQLite settings.
When:  Once at server startup; the returned app handles all requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain (outermost first):                     │
    │  ┌──────┐ ┌─────────┐ ┌────────┐ ┌─────────┐             │
    │  │ CORS │→│ Session │→│ Req ID │→│ Logging │             │
    │  └──────┘ └─────────┘ └────────┘ └─────────┘             │
    │                                                          │
    │  Routes:                                                 │
    │  /health  /api/auth  /api/session  /api/floorplans  ...  │
    │                                                          │
    │  Exception Handlers (error_handlers.py):                 │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ 400 validation │ 401 auth │ 404 │ 409 │ 500 generic │  │
    │  └────────────────────────────────────────────────────┘  │
    │                                                          │
    │  app.state.database → Database (engine + sessions)       │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Log startup complete

    Shutdown:
    1. Dispose database engine (close all connections)
    2. Log shutdown complete
"""

import logging
import secrets
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from acaiaclub import __version__
from acaiaclub.config import Settings
from acaiaclub.config import settings as default_settings
from acaiaclub.database import Database
from acaiaclub.error_handlers import register_exception_handlers
from acaiaclub.middleware.logging import RequestLoggingMiddleware
from acaiaclub.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from acaiaclub.routes import (
    auth,
    company_clients,
    dj_sessions,
    floor_plans,
    health,
    purchasing,
    vinyl,
    workstations,
)

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s

    Called once during startup, before anything else logs. Every line
    carries the request id (or "-" outside a request), so a single grep
    finds every line of a failed request.
    """
    handler = logging.StreamHandler(sys.stdout)  # Docker captures stdout
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # These log at DEBUG/INFO for every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


MIN_SECRET_LENGTH = 32


def session_secret(settings: Settings) -> str:
    """
    The key SessionMiddleware signs cookies with.

    Without AUTH_SECRET a random per-process key is used outside
    production: logins work but do not survive a restart.

    Raises:
        ValueError: ENVIRONMENT=production and AUTH_SECRET is missing or
            shorter than MIN_SECRET_LENGTH; the app is never built
    """
    if settings.is_production and len(settings.auth_secret) < MIN_SECRET_LENGTH:
        raise ValueError(
            f"AUTH_SECRET must be set to at least {MIN_SECRET_LENGTH} characters in production."
        )
    if settings.auth_secret:
        return settings.auth_secret
    logger.warning("AUTH_SECRET is not set; using a random session key for this process")
    return secrets.token_urlsafe(32)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to build against. Defaults to the settings
                  loaded from the environment; tests pass their own.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging(settings.log_level)
        logger.info("=" * 60)
        logger.info("Acaia Club Backend starting up (%s)...", settings.environment)

        try:
            settings.validate_required_for_production()
        except ValueError as e:
            logger.error("Configuration error: %s", str(e))
            logger.error("Fix the configuration and restart the server.")

        logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
        logger.info("=" * 60)

        yield

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("Acaia Club Backend shutting down...")
        await app.state.database.dispose()
        logger.info("Shutdown complete.")

    app = FastAPI(
        title="Acaia Club API",
        description=(
            "Venue management API: floor plans, vinyl library and DJ sessions, "
            "purchasing, company clients and staff login."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = outermost)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Signed cookie session; request.session inside every handler
    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret(settings),
        session_cookie=settings.session_cookie_name,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.is_production,
    )

    # Frontend and backend are different origins in development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,  # the session cookie
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(workstations.router)
    app.include_router(floor_plans.router)
    app.include_router(vinyl.router)
    app.include_router(dj_sessions.router)
    app.include_router(purchasing.router)
    app.include_router(company_clients.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `acaiaclub.main:app` to be importable. Building the app
# does not connect: the engine opens connections on first use.
app = create_app()
