"""Initial schema

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 10:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_col() -> sa.Column:
    return sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False)


def _created_col() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def _updated_col() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False)


def _deleted_col() -> sa.Column:
    return sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True)


def upgrade() -> None:
    op.create_table(
        "users",
        _id_col(),
        _created_col(),
        _updated_col(),
        _deleted_col(),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("nickname", sa.String(length=50), nullable=False),
        sa.Column("avatar", sa.String(length=255), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=False)
    op.create_index("ix_users_email", "users", ["email"], unique=False)
    op.create_index("ix_users_deleted_at", "users", ["deleted_at"], unique=False)

    op.create_table(
        "weapons",
        _id_col(),
        _created_col(),
        _updated_col(),
        _deleted_col(),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("story", sa.Text(), nullable=False),
        sa.UniqueConstraint("name", name="uq_weapons_name"),
    )
    op.create_index("ix_weapons_deleted_at", "weapons", ["deleted_at"], unique=False)

    op.create_table(
        "troves",
        _id_col(),
        _created_col(),
        _updated_col(),
        _deleted_col(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
    )
    op.create_index("ix_troves_deleted_at", "troves", ["deleted_at"], unique=False)

    op.create_table(
        "profile_field_templates",
        _id_col(),
        _created_col(),
        _updated_col(),
        _deleted_col(),
        sa.Column("field_key", sa.String(length=100), nullable=False),
        sa.Column("field_name", sa.String(length=100), nullable=False),
        sa.Column("field_type", sa.String(length=50), nullable=False),
        sa.Column("is_required", sa.Boolean(), nullable=False),
        sa.Column("is_searchable", sa.Boolean(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("default_value", sa.Text(), nullable=False),
        sa.Column("options", sa.Text(), nullable=False),
        sa.Column("validation", sa.Text(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("icon", sa.String(length=500), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("default_unlock_rules", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.UniqueConstraint("field_key", name="uq_profile_field_templates_field_key"),
    )
    op.create_index(
        "ix_profile_field_templates_category",
        "profile_field_templates",
        ["category"],
        unique=False,
    )
    op.create_index(
        "ix_profile_field_templates_deleted_at",
        "profile_field_templates",
        ["deleted_at"],
        unique=False,
    )

    op.create_table(
        "profile_fields",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("field_key", sa.String(length=100), nullable=False),
        sa.Column("field_name", sa.String(length=100), nullable=False),
        sa.Column("field_type", sa.String(length=50), nullable=False),
        sa.Column("is_system", sa.Boolean(), nullable=False),
        sa.Column("is_required", sa.Boolean(), nullable=False),
        sa.Column("is_searchable", sa.Boolean(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("default_value", sa.Text(), nullable=False),
        sa.Column("options", sa.Text(), nullable=False),
        sa.Column("validation", sa.Text(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("icon", sa.String(length=500), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_profile_fields_user_id_users",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("user_id", "field_key", name="uq_profile_fields_user_id_field_key"),
    )
    op.create_index("ix_profile_fields_user_id", "profile_fields", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_profile_fields_user_id", table_name="profile_fields")
    op.drop_table("profile_fields")

    op.drop_index("ix_profile_field_templates_deleted_at", table_name="profile_field_templates")
    op.drop_index("ix_profile_field_templates_category", table_name="profile_field_templates")
    op.drop_table("profile_field_templates")

    op.drop_index("ix_troves_deleted_at", table_name="troves")
    op.drop_table("troves")

    op.drop_index("ix_weapons_deleted_at", table_name="weapons")
    op.drop_table("weapons")

    op.drop_index("ix_users_deleted_at", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
