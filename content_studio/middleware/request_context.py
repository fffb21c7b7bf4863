# Request context middleware: X-Correlation-ID (read or generated) and X-User-ID bound into structlog contextvars.
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from content_studio.deps import HEADER_USER_ID
from content_studio.logging_config import get_logger

logger = get_logger(__name__)

HEADER_CORRELATION_ID = "X-Correlation-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind correlation_id (echoed in the response) and user_id to every log line of the request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(HEADER_CORRELATION_ID, "").strip()
        if not correlation_id:
            correlation_id = str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)
        user_id = request.headers.get(HEADER_USER_ID, "").strip()
        if user_id:
            structlog.contextvars.bind_contextvars(user_id=user_id)

        response = await call_next(request)
        response.headers[HEADER_CORRELATION_ID] = correlation_id
        logger.debug("request.done", method=request.method, path=request.url.path, status=response.status_code)
        return response
