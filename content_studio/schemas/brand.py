"""Brand request/response schemas."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from content_studio.schemas.common import PLATFORMS, Platform


class BrandCreate(BaseModel):
    """Request body for POST /api/brands."""

    name: str = Field(..., min_length=1, max_length=255)
    website: str = Field(..., min_length=1, max_length=512)
    additional_info: Optional[str] = Field(None, max_length=5000)
    target_audience: Optional[str] = Field(None, max_length=2000)
    brand_tone: Optional[str] = Field(None, max_length=2000)
    key_offer: Optional[str] = Field(None, max_length=2000)
    image_guidelines: Optional[str] = Field(None, max_length=2000)
    # Angle generation runs right after creation for these platforms; empty list skips it.
    generate_angles_for: List[Platform] = Field(default_factory=lambda: list(PLATFORMS))


class BrandUpdate(BaseModel):
    """Request body for PATCH /api/brands/{brand_id}; unset fields are kept."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    website: Optional[str] = Field(None, min_length=1, max_length=512)
    additional_info: Optional[str] = Field(None, max_length=5000)
    target_audience: Optional[str] = Field(None, max_length=2000)
    brand_tone: Optional[str] = Field(None, max_length=2000)
    key_offer: Optional[str] = Field(None, max_length=2000)
    image_guidelines: Optional[str] = Field(None, max_length=2000)


class BrandOut(BaseModel):
    """Brand in API response."""

    id: UUID
    user_id: UUID
    name: str
    website: str
    additional_info: Optional[str] = None
    target_audience: Optional[str] = None
    brand_tone: Optional[str] = None
    key_offer: Optional[str] = None
    image_guidelines: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BrandCreateResponse(BaseModel):
    """Response for POST /api/brands (201). Angle generation continues in the background."""

    brand: BrandOut
    angles_generation: str = Field(..., description="scheduled | skipped")
    platforms: List[Platform] = Field(default_factory=list)


class AutofillRequest(BaseModel):
    """Body for POST /api/brands/autofill (form prefill, nothing persisted)."""

    brand_id: Optional[UUID] = None
    name: str = Field(..., min_length=1, max_length=255)
    website: str = Field(..., min_length=1, max_length=512)
    additional_info: Optional[str] = None


class AutofillResponse(BaseModel):
    """Strategy suggestions returned by the autofill workflow."""

    target_audience: str
    brand_tone: str
    key_offer: str


class DeletePreview(BaseModel):
    """What a confirmed delete will remove; `confirm_with` must be echoed back as ?confirm=."""

    entity: str
    id: UUID
    name: str
    confirm_with: str
    cascade: str
    angles: int = 0
    ideas: int = 0
    generated: int = 0


class DeleteResult(BaseModel):
    """Row counts removed by a cascade delete."""

    entity: str
    id: UUID
    angles: int = 0
    ideas: int = 0
    generated: int = 0
