"""
Footguns API Server

FastAPI server exposing the footgun catalog read-only.

Endpoints:
- GET /health - Liveness check with catalog size
- GET /footguns - List all footguns
- GET /footguns/open - List unresolved footguns
- GET /footguns/{id} - Get footgun details
- GET /footguns/framework/{name} - Footguns for a framework
- GET /footguns/search - Keyword search
- GET /footguns/stats - Catalog statistics
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings
from src.catalog import FootgunCatalog, FootgunSearchEngine, load_default_catalog
from src.api.footgun_routes import router as footgun_router

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(catalog: Optional[FootgunCatalog] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        catalog: Catalog to serve; loaded from the configured data path
            when omitted

    Returns:
        The FastAPI application
    """
    settings.logging.configure()

    if catalog is None:
        catalog = load_default_catalog()

    app = FastAPI(
        title="Footguns API",
        description="Recurring web-framework pitfalls with explanations and fixes",
        version=VERSION,
        debug=settings.api.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.state.catalog = catalog
    app.state.search_engine = FootgunSearchEngine(catalog)

    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "version": VERSION,
            "footguns": len(catalog),
        }

    app.include_router(footgun_router)

    logger.info(f"API ready with {len(catalog)} footguns")
    return app
