"""User model."""

from sqlalchemy import Column, Integer, String

from gms.database import Base
from gms.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and grocery ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False)
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    diet_preference = Column(String(50), nullable=False, default="None")
