"""Brand → platform → angle → idea tree with derived counts."""
from typing import List, Optional

from pydantic import BaseModel

from content_studio.schemas.brand import BrandOut
from content_studio.schemas.common import Platform
from content_studio.schemas.content import ContentAngleOut, ContentIdeaOut, GeneratedContentOut


class ContentCounts(BaseModel):
    """generated_count + pending_count == idea_count at every level."""

    idea_count: int = 0
    generated_count: int = 0
    pending_count: int = 0


class IdeaNode(BaseModel):
    idea: ContentIdeaOut
    has_content: bool
    latest_content: Optional[GeneratedContentOut] = None


class AngleNode(BaseModel):
    angle: ContentAngleOut
    ideas: List[IdeaNode]
    counts: ContentCounts


class PlatformGroup(BaseModel):
    platform: Platform
    angle_count: int
    angles: List[AngleNode]
    counts: ContentCounts


class BrandTree(BaseModel):
    brand: BrandOut
    total_angles: int
    platforms: List[PlatformGroup]
    totals: ContentCounts


class ContentTotals(BaseModel):
    """Dashboard totals across every brand of a user."""

    brands: int = 0
    angles: int = 0
    ideas: int = 0
    generated: int = 0
    pending: int = 0


class DashboardResponse(BaseModel):
    brands: List[BrandTree]
    totals: ContentTotals
