"""Brand model."""
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from content_studio.db import Base


class Brand(Base):
    """Brand owned by one user; root of the angle → idea → content hierarchy."""

    __tablename__ = "brands"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    website: Mapped[str] = mapped_column(String(512), nullable=False)
    additional_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    target_audience: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    brand_tone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    key_offer: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_guidelines: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    content_angles: Mapped[List["ContentAngle"]] = relationship(back_populates="brand")
    generated_content: Mapped[List["GeneratedContent"]] = relationship(back_populates="brand")
