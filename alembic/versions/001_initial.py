"""initial: brands, content_angles, content_ideas, generated_content

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PLATFORM_CHECK = "platform IN ('twitter', 'linkedin', 'newsletter')"


def upgrade() -> None:
    op.create_table(
        "brands",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("website", sa.String(512), nullable=False),
        sa.Column("additional_info", sa.Text(), nullable=True),
        sa.Column("target_audience", sa.Text(), nullable=True),
        sa.Column("brand_tone", sa.Text(), nullable=True),
        sa.Column("key_offer", sa.Text(), nullable=True),
        sa.Column("image_guidelines", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_brands_user_id", "brands", ["user_id"], unique=False)

    # No ON DELETE CASCADE below: the application deletes children first, in one transaction.
    op.create_table(
        "content_angles",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("brand_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("platform", sa.String(32), nullable=False),
        sa.Column("header", sa.String(512), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column("tonality", sa.Text(), server_default="", nullable=False),
        sa.Column("objective", sa.Text(), server_default="", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.CheckConstraint(PLATFORM_CHECK, name="ck_content_angles_platform"),
        sa.ForeignKeyConstraint(["brand_id"], ["brands.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_content_angles_brand_id", "content_angles", ["brand_id"], unique=False)

    op.create_table(
        "content_ideas",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("angle_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("platform", sa.String(32), nullable=False),
        sa.Column("topic", sa.String(512), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column("image_prompt", sa.Text(), server_default="", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.CheckConstraint(PLATFORM_CHECK, name="ck_content_ideas_platform"),
        sa.ForeignKeyConstraint(["angle_id"], ["content_angles.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_content_ideas_angle_id", "content_ideas", ["angle_id"], unique=False)

    op.create_table(
        "generated_content",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("idea_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("brand_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("platform", sa.String(32), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.CheckConstraint(PLATFORM_CHECK, name="ck_generated_content_platform"),
        sa.ForeignKeyConstraint(["idea_id"], ["content_ideas.id"]),
        sa.ForeignKeyConstraint(["brand_id"], ["brands.id"]),
        sa.PrimaryKeyConstraint("id"),
        # One live row per idea; upserts target this constraint.
        sa.UniqueConstraint("idea_id", name="ux_generated_content_idea_id"),
    )
    op.create_index("ix_generated_content_brand_id", "generated_content", ["brand_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_generated_content_brand_id", table_name="generated_content")
    op.drop_table("generated_content")
    op.drop_index("ix_content_ideas_angle_id", table_name="content_ideas")
    op.drop_table("content_ideas")
    op.drop_index("ix_content_angles_brand_id", table_name="content_angles")
    op.drop_table("content_angles")
    op.drop_index("ix_brands_user_id", table_name="brands")
    op.drop_table("brands")
