"""
db/models/association.py

Association model: the tenant under which inventory is partitioned.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.inventory_category import InventoryCategory
    from db.models.inventory_item import InventoryItem
    from db.models.inventory_location import InventoryLocation


class Association(Base, TimestampMixin):
    """
    One organization using the dashboard.

    Categories, locations and items all belong to exactly one association.
    """

    __tablename__ = "associations"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    categories: Mapped[list["InventoryCategory"]] = relationship(
        "InventoryCategory",
        back_populates="association",
        cascade="all, delete-orphan",
        lazy="select",
    )

    locations: Mapped[list["InventoryLocation"]] = relationship(
        "InventoryLocation",
        back_populates="association",
        cascade="all, delete-orphan",
        lazy="select",
    )

    items: Mapped[list["InventoryItem"]] = relationship(
        "InventoryItem",
        back_populates="association",
        cascade="all, delete-orphan",
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"<Association id={self.id} name={self.name!r}>"
