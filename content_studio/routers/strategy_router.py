"""Content angles API."""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status

from content_studio.context import AppContext
from content_studio.deps import get_context, get_user_id
from content_studio.schemas.brand import DeletePreview, DeleteResult
from content_studio.schemas.common import Platform
from content_studio.schemas.content import AngleSummaryOut, GenerateAnglesRequest, GenerateAnglesResponse

router = APIRouter(prefix="/api", tags=["strategy"])


@router.post(
    "/brands/{brand_id}/angles/generate",
    response_model=GenerateAnglesResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_angles(
    brand_id: UUID,
    payload: Optional[GenerateAnglesRequest] = Body(None),
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> GenerateAnglesResponse:
    """One generation round trip per platform; failed platforms are listed, not fatal."""
    payload = payload or GenerateAnglesRequest()
    return await ctx.strategy.generate_angles(user_id, brand_id, payload.platforms)


@router.get("/brands/{brand_id}/angles", response_model=List[AngleSummaryOut])
async def list_angles(
    brand_id: UUID,
    platform: Optional[Platform] = Query(None),
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> List[AngleSummaryOut]:
    return await ctx.queries.angle_summaries(user_id, brand_id, platform)


@router.get("/angles/{angle_id}/delete-preview", response_model=DeletePreview)
async def angle_delete_preview(
    angle_id: UUID,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> DeletePreview:
    return await ctx.strategy.delete_preview(user_id, angle_id)


@router.delete("/angles/{angle_id}", response_model=DeleteResult)
async def delete_angle(
    angle_id: UUID,
    confirm: str = Query("", description="Exact angle title"),
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> DeleteResult:
    return await ctx.strategy.delete_angle(user_id, angle_id, confirm)
