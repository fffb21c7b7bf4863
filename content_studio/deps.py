"""FastAPI dependencies: application context and caller identity."""
from typing import Optional
from uuid import UUID

import structlog
from fastapi import Header, HTTPException, Request, status

from content_studio.context import AppContext

HEADER_USER_ID = "X-User-ID"


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_user_id(x_user_id: Optional[str] = Header(None, alias=HEADER_USER_ID)) -> UUID:
    """Caller identity from X-User-ID (authentication happens upstream)."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-ID header")
    try:
        user_id = UUID(x_user_id.strip())
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid X-User-ID header") from None
    structlog.contextvars.bind_contextvars(user_id=str(user_id))
    return user_id
