"""Grocery model for purchased items tracked until eaten, deleted or wasted."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from gms.database import Base
from gms.models.mixins import TimestampMixin


class Grocery(Base, TimestampMixin):
    """A purchased grocery owned by exactly one user."""

    __tablename__ = "groceries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Numeric(12, 3), nullable=False, default=0)
    unit = Column(String(50), nullable=False)  # "kg", "ml", "pcs", ...
    price = Column(Numeric(12, 2), nullable=False, default=0)
    category = Column(String(100), nullable=False)
    purchased_date = Column(DateTime(timezone=True), nullable=False)
    expiry_date = Column(DateTime(timezone=True), nullable=False, index=True)
    is_wasted = Column(Boolean, nullable=False, default=False, index=True)
    # Set only when is_wasted flips to True
    wasted_date = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", backref="groceries")
