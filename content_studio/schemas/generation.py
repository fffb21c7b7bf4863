"""
Generation webhook wire schemas.
Request envelope: {"identifier": ..., "data": {...}} with camelCase keys.
Results are the canonical shapes after response normalization.
"""
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from content_studio.schemas.common import Platform


class GenerationIdentifier(str, Enum):
    AUTOFILL = "autofill"
    GENERATE_ANGLES = "generateAngles"
    GENERATE_IDEAS = "generateIdeas"
    GENERATE_CONTENT = "generateContent"


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- request payloads ---


class AngleBrief(WireModel):
    header: str
    description: str = ""
    tonality: str = ""
    objective: str = ""


class BrandBrief(WireModel):
    name: str
    website: str
    target_audience: str = ""
    brand_tone: str = ""
    key_offer: str = ""
    image_guidelines: Optional[str] = None


class IdeaBrief(WireModel):
    topic: str
    description: str = ""
    image_prompt: str = ""


class AutofillData(WireModel):
    # New-brand form has no id yet.
    brand_id: Optional[UUID] = None
    name: str = Field(..., min_length=1)
    website: str = Field(..., min_length=1)
    additional_info: Optional[str] = None


class GenerateAnglesData(WireModel):
    brand_id: UUID
    name: str = Field(..., min_length=1)
    website: str = Field(..., min_length=1)
    additional_info: Optional[str] = None
    target_audience: Optional[str] = None
    brand_tone: Optional[str] = None
    key_offer: Optional[str] = None
    image_guidelines: Optional[str] = None
    platforms: List[Platform] = Field(..., min_length=1)


class GenerateIdeasData(WireModel):
    angle_id: UUID
    platform: Platform
    selected_angle: AngleBrief
    brand_data: BrandBrief


class GenerateContentData(WireModel):
    idea_id: UUID
    platform: Platform
    content_idea: IdeaBrief
    brand_data: BrandBrief
    selected_angle: AngleBrief


REQUEST_MODELS = {
    GenerationIdentifier.AUTOFILL: AutofillData,
    GenerationIdentifier.GENERATE_ANGLES: GenerateAnglesData,
    GenerationIdentifier.GENERATE_IDEAS: GenerateIdeasData,
    GenerationIdentifier.GENERATE_CONTENT: GenerateContentData,
}


# --- canonical results ---


class AutofillResult(WireModel):
    target_audience: str
    brand_tone: str
    key_offer: str


class AngleDraft(WireModel):
    header: str = Field(..., min_length=1)
    description: str = ""
    tonality: str = ""
    objective: str = ""


class AnglesResult(WireModel):
    angles: List[AngleDraft]


class IdeaDraft(WireModel):
    topic: str = Field(..., min_length=1)
    description: str = ""
    image_prompt: str = ""


class IdeasResult(WireModel):
    ideas: List[IdeaDraft]


class ContentResult(WireModel):
    content: str
    image_url: str = ""
