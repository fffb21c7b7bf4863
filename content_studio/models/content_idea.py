"""Content idea model."""
import uuid
from datetime import datetime
from typing import List

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from content_studio.db import Base
from content_studio.models.content_angle import PLATFORM_CHECK


class ContentIdea(Base):
    """
    Concrete topic derived from an angle.
    platform is stored per idea; aggregates only count ideas whose platform matches the angle's.
    """

    __tablename__ = "content_ideas"
    __table_args__ = (CheckConstraint(PLATFORM_CHECK, name="ck_content_ideas_platform"),)

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    angle_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("content_angles.id"),
        nullable=False,
        index=True,
    )
    platform: Mapped[str] = mapped_column(String(32), nullable=False)
    topic: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_prompt: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    angle: Mapped["ContentAngle"] = relationship(back_populates="content_ideas")
    generated_content: Mapped[List["GeneratedContent"]] = relationship(back_populates="idea")
