"""Pydantic request/response schemas."""
from content_studio.schemas.common import ErrorResponse, Platform, PLATFORMS
from content_studio.schemas.brand import (
    BrandCreate,
    BrandCreateResponse,
    BrandOut,
    BrandUpdate,
    DeletePreview,
    DeleteResult,
)
from content_studio.schemas.content import (
    BrandWithContent,
    ContentAngleOut,
    ContentAngleWithIdeas,
    ContentIdeaOut,
    ContentIdeaWithGenerated,
    GeneratedContentOut,
)
from content_studio.schemas.hierarchy import BrandTree, ContentCounts, DashboardResponse

__all__ = [
    "ErrorResponse",
    "Platform",
    "PLATFORMS",
    "BrandCreate",
    "BrandCreateResponse",
    "BrandOut",
    "BrandUpdate",
    "DeletePreview",
    "DeleteResult",
    "BrandWithContent",
    "ContentAngleOut",
    "ContentAngleWithIdeas",
    "ContentIdeaOut",
    "ContentIdeaWithGenerated",
    "GeneratedContentOut",
    "BrandTree",
    "ContentCounts",
    "DashboardResponse",
]
