"""FastAPI application factory."""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from . import dependencies
from .admin.router import router as admin_router
from .config import Settings
from .exceptions import PlatformError, ValidationError
from .infrastructure.embeddings.base import EmbeddingClient
from .infrastructure.llm.base import LLMClient
from .ingestion.router import router as ingestion_router
from .logging import setup_logging
from .retrieval.router import router as retrieval_router

LOGGER = logging.getLogger(__name__)


async def _platform_error_handler(request: Request, exc: Exception) -> JSONResponse:
    public_message = exc.public_message if isinstance(exc, PlatformError) else "Error processing request."
    if isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        LOGGER.info("Request rejected | path=%s kind=%s error=%s", request.url.path, type(exc).__name__, exc)
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        LOGGER.error("Request failed | path=%s kind=%s error=%s", request.url.path, type(exc).__name__, exc)
    return JSONResponse(status_code=status_code, content={"error": public_message, "details": str(exc)})


def create_app(
    settings: Settings | None = None,
    *,
    embedder: EmbeddingClient | None = None,
    llm: LLMClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``embedder`` and ``llm`` replace the configured providers when given.
    The index is rebuilt from the store before the app serves requests.
    """

    settings = settings or dependencies.get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        container = await dependencies.build_container(settings, embedder=embedder, llm=llm)
        try:
            await container.synchronizer.resync()
            app.state.services = container
            yield
        finally:
            app.state.services = None
            await container.close()

    app = FastAPI(
        title=settings.fastapi.title,
        description=settings.fastapi.description,
        version=settings.fastapi.version,
        docs_url=settings.fastapi.docs_url,
        redoc_url=settings.fastapi.redoc_url,
        openapi_url=settings.fastapi.openapi_url,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.fastapi.cors_allow_origins,
        allow_credentials=settings.fastapi.cors_allow_credentials,
        allow_methods=settings.fastapi.cors_allow_methods,
        allow_headers=settings.fastapi.cors_allow_headers,
    )
    app.add_middleware(GZipMiddleware, minimum_size=settings.fastapi.gzip_minimum_size)
    app.add_exception_handler(PlatformError, _platform_error_handler)

    app.include_router(ingestion_router, tags=["documents"])
    app.include_router(retrieval_router, tags=["retrieval"])
    app.include_router(admin_router, prefix="/admin", tags=["admin"])

    return app


def run() -> None:
    """Serve the application with uvicorn."""

    import uvicorn

    settings = dependencies.get_settings()
    uvicorn.run(
        "vectorrag.main:create_app",
        factory=True,
        host=settings.fastapi.host,
        port=settings.fastapi.port,
    )


if __name__ == "__main__":
    run()
