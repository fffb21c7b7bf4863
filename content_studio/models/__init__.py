"""SQLAlchemy models for Content Studio."""
from content_studio.models.brand import Brand
from content_studio.models.content_angle import ContentAngle
from content_studio.models.content_idea import ContentIdea
from content_studio.models.generated_content import GeneratedContent

__all__ = [
    "Brand",
    "ContentAngle",
    "ContentIdea",
    "GeneratedContent",
]
