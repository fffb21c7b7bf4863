"""Angle / idea / generated content schemas (flat and nested)."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from content_studio.schemas.brand import BrandOut
from content_studio.schemas.common import PLATFORMS, Platform


class GeneratedContentOut(BaseModel):
    """Generated content row."""

    id: UUID
    idea_id: UUID
    brand_id: UUID
    platform: Platform
    content: str
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ContentIdeaOut(BaseModel):
    """Content idea row."""

    id: UUID
    angle_id: UUID
    platform: Platform
    topic: str
    description: str = ""
    image_prompt: str = ""
    created_at: datetime

    model_config = {"from_attributes": True}


class ContentAngleOut(BaseModel):
    """Content angle row."""

    id: UUID
    brand_id: UUID
    platform: Platform
    header: str
    description: str = ""
    tonality: str = ""
    objective: str = ""
    created_at: datetime

    model_config = {"from_attributes": True}


# Nested shapes: missing relations default to empty lists here, at the loading
# boundary, so aggregation never deals with None.


class ContentIdeaWithGenerated(ContentIdeaOut):
    generated_content: List[GeneratedContentOut] = Field(default_factory=list)


class ContentAngleWithIdeas(ContentAngleOut):
    content_ideas: List[ContentIdeaWithGenerated] = Field(default_factory=list)


class BrandWithContent(BrandOut):
    content_angles: List[ContentAngleWithIdeas] = Field(default_factory=list)


class AngleSummaryOut(ContentAngleOut):
    """Angle plus display helpers and idea counts for the strategy page."""

    summary: str
    summary_truncated: bool
    objective_short: str
    idea_count: int = 0
    generated_count: int = 0
    pending_count: int = 0


class IdeaCounts(BaseModel):
    total: int = 0
    generated: int = 0
    pending: int = 0


class IdeaListResponse(BaseModel):
    """Response for GET /api/angles/{angle_id}/ideas."""

    angle_id: UUID
    ideas: List[ContentIdeaWithGenerated]
    counts: IdeaCounts


class GenerateAnglesRequest(BaseModel):
    """Body for POST /api/brands/{brand_id}/angles/generate."""

    platforms: List[Platform] = Field(default_factory=lambda: list(PLATFORMS), min_length=1)


class GenerateAnglesResponse(BaseModel):
    brand_id: UUID
    created: int
    angles: List[ContentAngleOut]
    failed_platforms: List[Platform] = Field(default_factory=list)


class GenerateIdeasResponse(BaseModel):
    angle_id: UUID
    created: int
    ideas: List[ContentIdeaOut]


class GeneratedContentResponse(BaseModel):
    """Latest generated content for an idea (null when pending)."""

    idea_id: UUID
    has_content: bool
    content: Optional[GeneratedContentOut] = None


class ContentSaveRequest(BaseModel):
    """Body for PUT /api/content/{content_id} and PATCH /api/content/{content_id}/draft."""

    content: str = Field(..., min_length=1)


class DraftAcceptedResponse(BaseModel):
    content_id: UUID
    commit_in_seconds: float
