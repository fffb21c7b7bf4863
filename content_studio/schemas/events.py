"""Domain event payloads carried on the event bus."""
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from content_studio.schemas.content import GeneratedContentOut

CONTENT_GENERATED = "contentGenerated"
SHOW_TOAST = "showToast"


class ToastType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class ContentGeneratedEvent(BaseModel):
    """Published only after the generated content is stored."""

    idea_id: UUID = Field(..., alias="ideaId")
    brand_id: UUID = Field(..., alias="brandId")
    angle_id: UUID = Field(..., alias="angleId")
    content: Optional[GeneratedContentOut] = None

    model_config = {"populate_by_name": True}


class ToastEvent(BaseModel):
    message: str
    type: ToastType = ToastType.SUCCESS
    # Routing only; not part of the wire payload.
    user_id: Optional[UUID] = Field(None, exclude=True)
