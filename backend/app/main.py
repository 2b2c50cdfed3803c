"""
Flicklist API — FastAPI application entry point.

Routers are registered here. Each resource lives in app/api/.
Firebase clients are created once in the lifespan and kept on app.state.
"""
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import auth, catalog, watchlist
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging_config import configure_logging
from app.db.client import init_firebase

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.LOG_LEVEL)
    owns_clients = getattr(app.state, "firebase", None) is None
    if owns_clients:
        app.state.firebase = init_firebase(settings)
    logger.info("Flicklist API started (env=%s)", settings.APP_ENV)
    try:
        yield
    finally:
        if owns_clients:
            app.state.firebase.close()
            app.state.firebase = None


def create_app() -> FastAPI:
    app = FastAPI(
        title="Flicklist API",
        description="Movie catalog and per-user watchlists backed by Firebase.",
        version="1.0.0",
        docs_url="/docs" if settings.ENABLE_DOCS else None,
        redoc_url="/redoc" if settings.ENABLE_DOCS else None,
        lifespan=lifespan,
    )

    # ── CORS ──────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(catalog.router,                          tags=["catalog"])
    app.include_router(auth.router,                             tags=["auth"])
    app.include_router(watchlist.router, prefix="/watchlist",   tags=["watchlist"])

    # ── Health check ──────────────────────────────────────────────────────────
    @app.get("/health", tags=["system"])
    def health_check() -> dict:
        """Liveness probe. Returns 200 when the server is up."""
        return {"status": "ok", "version": app.version, "env": settings.APP_ENV}

    return app


app = create_app()
