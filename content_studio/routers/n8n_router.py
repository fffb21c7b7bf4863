"""Proxy to the configured generation webhook (or the mock when none is set)."""
from typing import Any, Dict
from uuid import UUID

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from content_studio.context import AppContext
from content_studio.deps import get_context, get_user_id
from content_studio.errors import InvalidPayloadError
from content_studio.logging_config import get_logger

router = APIRouter(prefix="/api", tags=["n8n"])
logger = get_logger(__name__)


@router.post("/n8n")
async def forward_to_n8n(
    body: Dict[str, Any] = Body(...),
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> JSONResponse:
    """Forward {identifier, data} untouched and return the webhook's JSON answer as-is."""
    if not body.get("identifier"):
        raise InvalidPayloadError("Missing identifier")
    logger.info("n8n_proxy.forward", identifier=body.get("identifier"), mock=ctx.gateway.is_mock)
    data = await ctx.gateway.forward(body)
    return JSONResponse(content=data)
