"""
FastAPI Application
==================

Main FastAPI application for HTML to PNG carousel slide rendering.
"""

from contextlib import asynccontextmanager
import uuid
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import structlog
import uvicorn

from carousel_renderer.config.settings import get_settings, Settings
from carousel_renderer.config.logging import get_logger
from carousel_renderer.core.rendering.png_generator import (
    initialize_png_generator,
    close_png_generator,
    PNGGenerationError,
)
from carousel_renderer.api.middleware import BodySizeLimitMiddleware
from carousel_renderer.api.routes.health import router as health_router
from carousel_renderer.api.routes.render import router as render_router, MissingHTMLError
from carousel_renderer.models.schemas import ErrorResponse, RENDER_USAGE

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting carousel renderer")

    try:
        await initialize_png_generator()
        logger.info("PNG generator initialized")
    except PNGGenerationError as e:
        logger.error("PNG generator initialization failed", error=str(e))
        raise RuntimeError(f"PNG generator initialization failed: {e}")

    try:
        yield
    finally:
        logger.info("Shutting down carousel renderer")
        try:
            await close_png_generator()
            logger.info("PNG generator closed")
        except Exception as e:
            logger.error("Error closing PNG generator", error=str(e))


def _client_error_response() -> JSONResponse:
    error_response = ErrorResponse(error="HTML content required", usage=RENDER_USAGE)
    return JSONResponse(status_code=400, content=error_response.model_dump(exclude_none=True))


def _internal_error_response(exc: Exception, settings: Settings) -> JSONResponse:
    logger.error("Unhandled exception", error=str(exc), exc_info=exc)
    error_response = ErrorResponse(
        error="Internal server error",
        message=str(exc) if settings.debug else None,
    )
    return JSONResponse(status_code=500, content=error_response.model_dump(exclude_none=True))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function for creating FastAPI app instance.

    Args:
        settings: Settings override, defaults to the global settings

    Returns:
        FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Render HTML documents to 1080x1350 PNG carousel slides",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_size)

    # Wraps the size limit, so 413 responses carry the ID too.
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):  # type: ignore
        """Add request ID to all requests."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)
        except Exception as exc:
            response = _internal_error_response(exc, settings)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers["X-Request-ID"] = request_id
        return response

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_hosts,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(MissingHTMLError)
    async def missing_html_handler(request: Request, exc: MissingHTMLError) -> JSONResponse:
        logger.warning("Render request without HTML")
        return _client_error_response()

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Invalid render request", errors=len(exc.errors()))
        return _client_error_response()

    @app.exception_handler(PNGGenerationError)
    async def png_generation_exception_handler(
        request: Request, exc: PNGGenerationError
    ) -> JSONResponse:
        """Surface the raw rendering error to the caller."""
        logger.error("Render error", error_message=str(exc))
        error_response = ErrorResponse(error="Rendering failed", message=str(exc))
        return JSONResponse(status_code=500, content=error_response.model_dump(exclude_none=True))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Fallback for errors raised outside the request ID middleware."""
        return _internal_error_response(exc, settings)

    app.include_router(health_router)
    app.include_router(render_router)

    return app


app = create_app()


def run_server() -> None:
    """Run the server on the configured host and port."""
    settings = get_settings()
    logger.info("Carousel renderer listening", host=settings.host, port=settings.port)
    uvicorn.run(
        "carousel_renderer.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        log_config=None,
        access_log=True,
    )


if __name__ == "__main__":
    run_server()
