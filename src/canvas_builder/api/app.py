"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from canvas_builder.api.canvas import router as canvas_router
from canvas_builder.app_logging import configure_logging
from canvas_builder.containers import AppContainer
from canvas_builder.domain.errors import CanvasError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Canvas Builder API", lifespan=lifespan)
    app.state.container = container

    app.include_router(canvas_router)

    @app.exception_handler(CanvasError)
    async def canvas_error_handler(request: Request, exc: CanvasError) -> JSONResponse:
        if exc.status_code >= 500:  # noqa: PLR2004
            logger.error(
                "Canvas request failed: path=%s error=%s", request.url.path, exc
            )
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
