"""Common schemas (platform enum, errors, messages)."""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Platform(str, Enum):
    """Closed set of publishing platforms; declaration order is display order."""

    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    NEWSLETTER = "newsletter"


PLATFORMS = tuple(Platform)


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(..., description="Error message")
    code: Optional[str] = Field(None, description="Optional error code")
    extra: Optional[Dict[str, Any]] = Field(None, description="Extra context")
