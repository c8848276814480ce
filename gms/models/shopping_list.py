"""Shopping list models."""

from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from gms.database import Base
from gms.models.mixins import TimestampMixin


class ShoppingList(Base, TimestampMixin):
    """A named list of things to buy."""

    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    creation_date = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    # Relationships
    user = relationship("User", backref="shopping_lists")
    items = relationship(
        "ShoppingListItem", back_populates="shopping_list", cascade="all, delete-orphan"
    )


class ShoppingListItem(Base, TimestampMixin):
    """An entry on a shopping list; bought entries are kept for history."""

    __tablename__ = "shopping_list_items"

    id = Column(Integer, primary_key=True, index=True)
    shopping_list_id = Column(
        Integer, ForeignKey("shopping_lists.id"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    quantity = Column(Numeric(12, 3), nullable=False, default=0)
    unit = Column(String(50), nullable=False, default="pcs")
    is_bought = Column(Boolean, nullable=False, default=False, index=True)
    bought_date = Column(DateTime(timezone=True), nullable=True)
    grocery_id = Column(Integer, ForeignKey("groceries.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    shopping_list = relationship("ShoppingList", back_populates="items")
    # Deleting a grocery nulls grocery_id on items bought into it
    grocery = relationship("Grocery", backref="shopping_list_items")
