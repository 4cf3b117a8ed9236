"""
db/models/inventory_category.py

Item categories, optionally nested under a parent category.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.association import Association


class InventoryCategory(Base, TimestampMixin):
    __tablename__ = "inventory_categories"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    association_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("associations.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("inventory_categories.id", ondelete="SET NULL"),
        nullable=True,
    )

    association: Mapped[Association] = relationship("Association", back_populates="categories")

    __table_args__ = (
        Index("ix_inventory_categories_association_id", "association_id"),
        Index("ix_inventory_categories_parent_id", "parent_id"),
    )


# Names are unique per association and parent, ignoring case; top-level
# rows (NULL parent) collide with each other.
Index(
    "uq_inventory_categories_association_name_parent",
    InventoryCategory.association_id,
    func.lower(InventoryCategory.name),
    InventoryCategory.parent_id,
    unique=True,
    postgresql_nulls_not_distinct=True,
)
