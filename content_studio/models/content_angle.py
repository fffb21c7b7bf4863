"""Content angle model."""
import uuid
from datetime import datetime
from typing import List

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from content_studio.db import Base

PLATFORM_CHECK = "platform IN ('twitter', 'linkedin', 'newsletter')"


class ContentAngle(Base):
    """
    Strategic theme for one brand on one platform.
    No ON DELETE CASCADE: children are removed by the services, child before parent.
    """

    __tablename__ = "content_angles"
    __table_args__ = (CheckConstraint(PLATFORM_CHECK, name="ck_content_angles_platform"),)

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    brand_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("brands.id"),
        nullable=False,
        index=True,
    )
    platform: Mapped[str] = mapped_column(String(32), nullable=False)
    header: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tonality: Mapped[str] = mapped_column(Text, nullable=False, default="")
    objective: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    brand: Mapped["Brand"] = relationship(back_populates="content_angles")
    content_ideas: Mapped[List["ContentIdea"]] = relationship(back_populates="angle")
