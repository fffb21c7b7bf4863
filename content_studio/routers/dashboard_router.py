"""Aggregated views: dashboard, single brand tree, pending toasts."""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from content_studio.context import AppContext
from content_studio.deps import get_context, get_user_id
from content_studio.schemas.events import ToastEvent
from content_studio.schemas.hierarchy import BrandTree, DashboardResponse

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> DashboardResponse:
    """All brand trees of the caller plus totals."""
    return await ctx.queries.dashboard(user_id)


@router.get("/brands/{brand_id}/tree", response_model=BrandTree)
async def brand_tree(
    brand_id: UUID,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> BrandTree:
    return await ctx.queries.brand_tree(user_id, brand_id)


@router.get("/toasts", response_model=List[ToastEvent])
async def toasts(
    drain: bool = Query(True, description="Clear returned toasts"),
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> List[ToastEvent]:
    return ctx.toasts.drain(user_id) if drain else ctx.toasts.recent(user_id)
