"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "role",
        sa.Column("id", sa.Uuid(), primary_key=True),
        *_timestamps(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
    )
    op.create_index("ix_role_name", "role", ["name"])

    op.create_table(
        "user",
        sa.Column("id", sa.Uuid(), primary_key=True),
        *_timestamps(),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("role_id", sa.Uuid(), sa.ForeignKey("role.id"), nullable=False),
    )
    op.create_index("ix_user_email", "user", ["email"])
    op.create_index("ix_user_role_id", "user", ["role_id"])

    op.create_table(
        "material",
        sa.Column("id", sa.Uuid(), primary_key=True),
        *_timestamps(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("unit", sa.String(length=50), nullable=False),
        sa.Column("bar_code", sa.String(length=100), nullable=True),
    )

    op.create_table(
        "requisition",
        sa.Column("id", sa.Uuid(), primary_key=True),
        *_timestamps(),
        sa.Column("requested_user_id", sa.Uuid(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("status", sa.String(length=30), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
    )
    op.create_index("ix_requisition_requested_user_id", "requisition", ["requested_user_id"])
    op.create_index("ix_requisition_status", "requisition", ["status"])

    op.create_table(
        "requisitionitem",
        sa.Column("id", sa.Uuid(), primary_key=True),
        *_timestamps(),
        sa.Column("requisition_id", sa.Uuid(), sa.ForeignKey("requisition.id"), nullable=False),
        sa.Column("material_id", sa.Uuid(), sa.ForeignKey("material.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
    )
    op.create_index("ix_requisitionitem_requisition_id", "requisitionitem", ["requisition_id"])
    op.create_index("ix_requisitionitem_material_id", "requisitionitem", ["material_id"])

    op.create_table(
        "requisitionremark",
        sa.Column("id", sa.Uuid(), primary_key=True),
        *_timestamps(),
        sa.Column("requisition_id", sa.Uuid(), sa.ForeignKey("requisition.id"), nullable=False),
        sa.Column("author_id", sa.Uuid(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("content", sa.String(length=500), nullable=False),
    )
    op.create_index("ix_requisitionremark_requisition_id", "requisitionremark", ["requisition_id"])
    op.create_index("ix_requisitionremark_author_id", "requisitionremark", ["author_id"])


def downgrade() -> None:
    op.drop_index("ix_requisitionremark_author_id", table_name="requisitionremark")
    op.drop_index("ix_requisitionremark_requisition_id", table_name="requisitionremark")
    op.drop_table("requisitionremark")
    op.drop_index("ix_requisitionitem_material_id", table_name="requisitionitem")
    op.drop_index("ix_requisitionitem_requisition_id", table_name="requisitionitem")
    op.drop_table("requisitionitem")
    op.drop_index("ix_requisition_status", table_name="requisition")
    op.drop_index("ix_requisition_requested_user_id", table_name="requisition")
    op.drop_table("requisition")
    op.drop_table("material")
    op.drop_index("ix_user_role_id", table_name="user")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")
    op.drop_index("ix_role_name", table_name="role")
    op.drop_table("role")
