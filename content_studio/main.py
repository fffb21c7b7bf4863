"""FastAPI application entrypoint."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from content_studio import __version__
from content_studio.config import get_settings
from content_studio.context import AppContext
from content_studio.errors import (
    ConfirmationRequiredError,
    GenerationError,
    InvalidPayloadError,
    NotFoundError,
    ServiceUnavailableError,
    StudioError,
)
from content_studio.logging_config import configure_logging, get_logger
from content_studio.middleware.rate_limit import RateLimitMiddleware
from content_studio.middleware.request_context import RequestContextMiddleware
from content_studio.routers import (
    brands_router,
    content_router,
    dashboard_router,
    health_router,
    ideas_router,
    mock_n8n_router,
    n8n_router,
    strategy_router,
)
from content_studio.schemas.common import ErrorResponse

logger = get_logger(__name__)

# Checked in order; GenerationConnectionError is also a ServiceUnavailableError.
ERROR_STATUS = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConfirmationRequiredError, status.HTTP_409_CONFLICT),
    (InvalidPayloadError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ServiceUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (GenerationError, status.HTTP_502_BAD_GATEWAY),
)


def status_for(exc: StudioError) -> int:
    for error_type, code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def studio_error_handler(request: Request, exc: StudioError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.warning("request.failed", path=request.url.path, code=exc.code, error=exc.message)
    body = ErrorResponse(detail=exc.message, code=exc.code, extra=exc.extra or None)
    return JSONResponse(status_code=code, content=body.model_dump(mode="json"))


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """Build the app. An injected context is used as-is and left for the caller to close."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown: logging, composition root, teardown."""
        configure_logging()
        owned = context is None
        if owned:
            settings = get_settings()
            ctx = AppContext.build(settings)
            await ctx.start(create_schema=settings.app_env == "local")
            app.state.context = ctx
        logger.info("app_started", version=__version__)
        yield
        if owned:
            await app.state.context.aclose()
        logger.info("app_shutdown")

    app = FastAPI(
        title="Content Studio",
        version=__version__,
        lifespan=lifespan,
    )
    if context is not None:
        app.state.context = context
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(StudioError, studio_error_handler)

    app.include_router(health_router)
    app.include_router(brands_router)
    app.include_router(strategy_router)
    app.include_router(ideas_router)
    app.include_router(content_router)
    app.include_router(dashboard_router)
    app.include_router(n8n_router)
    app.include_router(mock_n8n_router)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root endpoint: app name and version."""
        return {"name": "content_studio", "version": __version__}

    return app


app = create_app()
