"""FastAPI application factory.

Learn: App factory pattern: create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown: it builds the TokenIssuer
once (a missing or weak JWT secret aborts startup here, not on the first
login) and disposes the database engine on the way out.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pinconnect import __version__
from pinconnect.api import api_router
from pinconnect.api.errors import register_error_handlers
from pinconnect.auth.dependencies import get_token_issuer
from pinconnect.config import settings
from pinconnect.errors import ConfigurationError

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown. Raising before `yield` stops the server from starting.
    """
    logger.info(
        "pinconnect.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    try:
        get_token_issuer()
    except ConfigurationError as e:
        logger.error("pinconnect.config_invalid", error=str(e))
        raise

    yield

    logger.info("pinconnect.shutdown")

    from pinconnect.db.engine import dispose_engine
    await dispose_engine()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="pinconnect",
        description="Pins, connects and the accounts that own them",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler

    from pinconnect.middleware.request_id import RequestIdMiddleware
    from pinconnect.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_error_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: pinconnect.main:app)
app = create_app()
