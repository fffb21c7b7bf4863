"""Generated content model."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from content_studio.db import Base
from content_studio.models.content_angle import PLATFORM_CHECK


class GeneratedContent(Base):
    """Final text + image for one idea. At most one row per idea (upsert on idea_id)."""

    __tablename__ = "generated_content"
    __table_args__ = (
        UniqueConstraint("idea_id", name="ux_generated_content_idea_id"),
        CheckConstraint(PLATFORM_CHECK, name="ck_generated_content_platform"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    idea_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("content_ideas.id"),
        nullable=False,
    )
    # Denormalized so brand-scoped deletes and ownership checks skip the idea/angle join.
    brand_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("brands.id"),
        nullable=False,
        index=True,
    )
    platform: Mapped[str] = mapped_column(String(32), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    idea: Mapped["ContentIdea"] = relationship(back_populates="generated_content")
    brand: Mapped["Brand"] = relationship(back_populates="generated_content")
