"""requirements and requirement types

Revision ID: 0001
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

json_list = sa.JSON().with_variant(JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "requirement_types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_requirement_types_name", "requirement_types", ["name"], unique=True)

    op.create_table(
        "requirements",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer", sa.String(length=255), nullable=False),
        sa.Column("contact", sa.String(length=255), nullable=True),
        sa.Column("details", sa.String(), nullable=False),
        sa.Column("type", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=100), nullable=False),
        sa.Column("images", json_list, nullable=False),
        sa.Column("videos", json_list, nullable=False),
        sa.Column("comments", json_list, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("last_comment_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_requirements_created_at", "requirements", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_requirements_created_at", table_name="requirements")
    op.drop_table("requirements")
    op.drop_index("ix_requirement_types_name", table_name="requirement_types")
    op.drop_table("requirement_types")
