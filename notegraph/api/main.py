"""FastAPI application main entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..services.config import get_config
from ..services.workspace import VaultContext
from .dependencies import get_vault_context
from .middleware import register_error_handlers
from .routes import graph, index, notes, search, vault

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the vault context and open the configured vault, if any."""
    context = getattr(app.state, "vault_context", None)
    if context is None:
        context = VaultContext(get_config())
        app.state.vault_context = context

    vault_path = context.config.vault_path
    if vault_path is not None and not context.is_open:
        logger.info("Running startup: opening vault %s", vault_path)
        try:
            context.open(vault_path)
        except Exception as exc:
            logger.exception("Startup failed: %s", exc)
            logger.error("App starting without an open vault due to initialization error")

    yield

    context.close()


def create_app(context: VaultContext | None = None) -> FastAPI:
    """Build the API application, optionally around an existing vault context."""
    app = FastAPI(
        title="notegraph API",
        description="Backlinks, link graph, and full-text search for Markdown vaults",
        version=__version__,
        lifespan=lifespan,
    )
    if context is not None:
        app.state.vault_context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(vault.router, tags=["vault"])
    app.include_router(notes.router, tags=["notes"])
    app.include_router(graph.router, tags=["graph"])
    app.include_router(search.router, tags=["search"])
    app.include_router(index.router, tags=["index"])

    @app.get("/health")
    def health(context: VaultContext = Depends(get_vault_context)):
        """Health check endpoint."""
        return {
            "status": "healthy",
            "vault_open": context.is_open,
            "notes": context.link_graph.note_count(),
        }

    return app


app = create_app()


__all__ = ["app", "create_app"]
