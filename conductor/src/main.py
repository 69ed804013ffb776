"""
Conductor - Application Factory
================================
Builds the FastAPI application: registers the routes from
``conductor.src.api.routes``, configures CORS, and manages the lifetime
of the shared ``AIService``.

Lifespan
--------
- Startup: if no service was injected, build one from ``settings``
  (API key + pooled ``httpx.AsyncClient``) and store it on
  ``app.state.ai_service``.
- Shutdown: close the connection pool of the service it created.
  Injected services stay owned by the caller.

Run with ``conductor-serve`` (see ``conductor.scripts.serve``) or
``uvicorn conductor.src.main:app``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from conductor.config.settings import settings
from conductor.src.api.routes import router
from conductor.src.core.ai_service import AIService
from conductor.src.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    owned: AIService | None = None
    if getattr(app.state, "ai_service", None) is None:
        owned = AIService.from_settings(settings)
        app.state.ai_service = owned
    logger.info("[APP] Ready — model: %s", settings.LLM_MODEL)
    try:
        yield
    finally:
        if owned is not None:
            await owned.aclose()
            app.state.ai_service = None
            logger.info("[APP] Gemini client closed.")


def create_app(ai_service: AIService | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        ai_service: Pre-built service to use instead of one built from
                    settings at startup (tests, embedding).

    Returns:
        A configured ``FastAPI`` instance.
    """
    configure_logging()
    app = FastAPI(title="Conductor Assistant API", lifespan=_lifespan)
    app.state.ai_service = ai_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app


app = create_app()
