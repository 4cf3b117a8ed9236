"""create associations and inventory tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "associations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "inventory_categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("association_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("parent_id", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["association_id"], ["associations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["inventory_categories.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_inventory_categories_association_id",
        "inventory_categories",
        ["association_id"],
        unique=False,
    )
    op.create_index("ix_inventory_categories_parent_id", "inventory_categories", ["parent_id"], unique=False)
    op.create_index(
        "uq_inventory_categories_association_name_parent",
        "inventory_categories",
        ["association_id", sa.text("lower(name)"), "parent_id"],
        unique=True,
        postgresql_nulls_not_distinct=True,
    )

    op.create_table(
        "inventory_locations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("association_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("parent_id", sa.Uuid(), nullable=True),
        sa.Column("is_room", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(["association_id"], ["associations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["inventory_locations.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_inventory_locations_association_id",
        "inventory_locations",
        ["association_id"],
        unique=False,
    )
    op.create_index("ix_inventory_locations_parent_id", "inventory_locations", ["parent_id"], unique=False)
    op.create_index(
        "uq_inventory_locations_association_name_parent",
        "inventory_locations",
        ["association_id", sa.text("lower(name)"), "parent_id"],
        unique=True,
        postgresql_nulls_not_distinct=True,
    )

    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("association_id", sa.Uuid(), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        sa.Column("location_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("serial_number", sa.String(length=120), nullable=True),
        sa.Column("barcode", sa.String(length=120), nullable=True),
        sa.Column(
            "condition",
            sa.String(length=16),
            nullable=False,
            comment="new, good, fair, poor, damaged, retired",
        ),
        sa.Column("is_consumable", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("quantity", sa.Integer(), nullable=True),
        sa.Column("minimum_quantity", sa.Integer(), nullable=True),
        sa.Column("purchase_date", sa.Date(), nullable=True),
        sa.Column("purchase_price", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("warranty_expiration", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["association_id"], ["associations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["inventory_categories.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["location_id"], ["inventory_locations.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_inventory_items_association_id", "inventory_items", ["association_id"], unique=False)
    op.create_index("ix_inventory_items_category_id", "inventory_items", ["category_id"], unique=False)
    op.create_index("ix_inventory_items_location_id", "inventory_items", ["location_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_inventory_items_location_id", table_name="inventory_items")
    op.drop_index("ix_inventory_items_category_id", table_name="inventory_items")
    op.drop_index("ix_inventory_items_association_id", table_name="inventory_items")
    op.drop_table("inventory_items")

    op.drop_index("uq_inventory_locations_association_name_parent", table_name="inventory_locations")
    op.drop_index("ix_inventory_locations_parent_id", table_name="inventory_locations")
    op.drop_index("ix_inventory_locations_association_id", table_name="inventory_locations")
    op.drop_table("inventory_locations")

    op.drop_index("uq_inventory_categories_association_name_parent", table_name="inventory_categories")
    op.drop_index("ix_inventory_categories_parent_id", table_name="inventory_categories")
    op.drop_index("ix_inventory_categories_association_id", table_name="inventory_categories")
    op.drop_table("inventory_categories")

    op.drop_table("associations")
