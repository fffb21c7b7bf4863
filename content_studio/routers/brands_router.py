"""Brands API: list, create (auto-generates angles), read, update, autofill, confirmed delete."""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from content_studio.context import AppContext
from content_studio.deps import get_context, get_user_id
from content_studio.schemas.brand import (
    AutofillRequest,
    AutofillResponse,
    BrandCreate,
    BrandCreateResponse,
    BrandOut,
    BrandUpdate,
    DeletePreview,
    DeleteResult,
)

router = APIRouter(prefix="/api/brands", tags=["brands"])


@router.get("", response_model=List[BrandOut])
async def list_brands(
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> List[BrandOut]:
    return await ctx.queries.list_brands(user_id)


@router.post("", response_model=BrandCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_brand(
    payload: BrandCreate,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> BrandCreateResponse:
    """Create a brand; angle generation for `generate_angles_for` continues in the background."""
    brand, platforms = await ctx.brands.create_brand(user_id, payload)
    return BrandCreateResponse(
        brand=brand,
        angles_generation="scheduled" if platforms else "skipped",
        platforms=platforms,
    )


@router.post("/autofill", response_model=AutofillResponse)
async def autofill_brand(
    payload: AutofillRequest,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> AutofillResponse:
    """Suggest target audience, tone and key offer from name + website."""
    return await ctx.brands.autofill(user_id, payload)


@router.get("/{brand_id}", response_model=BrandOut)
async def get_brand(
    brand_id: UUID,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> BrandOut:
    return await ctx.queries.get_brand(user_id, brand_id)


@router.patch("/{brand_id}", response_model=BrandOut)
async def update_brand(
    brand_id: UUID,
    payload: BrandUpdate,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> BrandOut:
    return await ctx.brands.update_brand(user_id, brand_id, payload)


@router.get("/{brand_id}/delete-preview", response_model=DeletePreview)
async def brand_delete_preview(
    brand_id: UUID,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> DeletePreview:
    """Name and cascade scope to show before asking for confirmation."""
    return await ctx.brands.delete_preview(user_id, brand_id)


@router.delete("/{brand_id}", response_model=DeleteResult)
async def delete_brand(
    brand_id: UUID,
    confirm: str = Query("", description="Exact brand name"),
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> DeleteResult:
    return await ctx.brands.delete_brand(user_id, brand_id, confirm)
