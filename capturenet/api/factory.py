"""capturenet — FastAPI application factory.

Importing this module builds nothing; callers that already hold a
``GraphResult`` (the CLI ``serve`` command, tests) pass it in.

Usage:
    uvicorn capturenet.api.factory:create_app --factory --reload --port 8000
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from capturenet import __version__
from capturenet.config.settings import settings
from capturenet.graph.engine import GraphEngine, GraphResult

logger = logging.getLogger("capturenet.api")


def create_app(result: GraphResult | None = None, include_docs: bool = True) -> FastAPI:
    """Build and return the FastAPI application.

    The graph is built once here and shared read-only by every request.
    A broken dataset raises ``DatasetError`` immediately rather than
    surfacing on the first request.
    """
    if result is None:
        result = GraphEngine().build_default()

    app = FastAPI(
        title="capturenet",
        description="Relationship and centralization analysis over a scored entity graph",
        version=__version__,
        docs_url="/docs" if include_docs else None,
        redoc_url="/redoc" if include_docs else None,
    )
    app.state.graph = result

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    from capturenet.api.routes.graph import router as graph_router
    app.include_router(graph_router)

    logger.info(
        "capturenet v%s serving %d entities (snapshot %s)",
        __version__, len(result.snapshot), result.snapshot.version[:8],
    )
    return app
