"""Build webhook request briefs from stored rows."""
from typing import Any

from pydantic import ValidationError

from content_studio.errors import InvalidPayloadError
from content_studio.schemas.generation import AngleBrief, BrandBrief, IdeaBrief


def brand_brief(brand: Any) -> BrandBrief:
    return BrandBrief(
        name=brand.name,
        website=brand.website,
        target_audience=brand.target_audience or "",
        brand_tone=brand.brand_tone or "",
        key_offer=brand.key_offer or "",
        image_guidelines=brand.image_guidelines or None,
    )


def angle_brief(angle: Any) -> AngleBrief:
    return AngleBrief(
        header=angle.header,
        description=angle.description or "",
        tonality=angle.tonality or "",
        objective=angle.objective or "",
    )


def idea_brief(idea: Any) -> IdeaBrief:
    return IdeaBrief(
        topic=idea.topic,
        description=idea.description or "",
        image_prompt=idea.image_prompt or "",
    )


def build_payload(model: Any, **fields: Any) -> Any:
    """Validate a request payload; failures are InvalidPayloadError, never sent upstream."""
    try:
        return model(**fields)
    except ValidationError as e:
        raise InvalidPayloadError(
            f"Invalid {model.__name__} payload",
            extra={"errors": e.errors(include_url=False, include_context=False)},
        ) from e
