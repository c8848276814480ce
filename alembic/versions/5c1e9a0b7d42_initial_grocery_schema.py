"""initial grocery schema

Revision ID: 5c1e9a0b7d42
Revises:
Create Date: 2026-10-19 09:12:31.804417

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1e9a0b7d42"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("diet_preference", sa.String(length=50), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "groceries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("unit", sa.String(length=50), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("purchased_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_wasted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("wasted_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_groceries_id"), "groceries", ["id"], unique=False)
    op.create_index(op.f("ix_groceries_user_id"), "groceries", ["user_id"], unique=False)
    op.create_index(op.f("ix_groceries_expiry_date"), "groceries", ["expiry_date"], unique=False)
    op.create_index(op.f("ix_groceries_is_wasted"), "groceries", ["is_wasted"], unique=False)

    op.create_table(
        "shopping_lists",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_shopping_lists_id"), "shopping_lists", ["id"], unique=False)
    op.create_index(op.f("ix_shopping_lists_user_id"), "shopping_lists", ["user_id"], unique=False)

    op.create_table(
        "shopping_list_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "shopping_list_id", sa.Integer(), sa.ForeignKey("shopping_lists.id"), nullable=False
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("unit", sa.String(length=50), nullable=False),
        sa.Column("is_bought", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("bought_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "grocery_id",
            sa.Integer(),
            sa.ForeignKey("groceries.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index(op.f("ix_shopping_list_items_id"), "shopping_list_items", ["id"], unique=False)
    op.create_index(
        op.f("ix_shopping_list_items_shopping_list_id"),
        "shopping_list_items",
        ["shopping_list_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_shopping_list_items_is_bought"), "shopping_list_items", ["is_bought"], unique=False
    )


def downgrade() -> None:
    op.drop_table("shopping_list_items")
    op.drop_table("shopping_lists")
    op.drop_table("groceries")
    op.drop_table("users")
