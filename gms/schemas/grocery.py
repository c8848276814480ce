"""Grocery schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class GroceryCreate(BaseModel):
    """Record a purchased grocery."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: Decimal = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=50)
    price: Decimal = Field(..., ge=0)
    category: str = Field(..., min_length=1, max_length=100)
    purchased_date: datetime
    expiry_date: datetime
    is_wasted: bool = False


class GroceryUpdate(BaseModel):
    """Replace the editable fields of a grocery.

    Category and wasted state cannot be changed here.
    """

    name: str = Field(..., min_length=1, max_length=255)
    quantity: Decimal = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=50)
    price: Decimal = Field(..., ge=0)
    purchased_date: datetime
    expiry_date: datetime


class GroceryResponse(BaseModel):
    """Grocery response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    quantity: Decimal
    unit: str
    price: Decimal
    category: str
    purchased_date: datetime
    expiry_date: datetime
    is_wasted: bool
    wasted_date: datetime | None
    created_at: datetime
    updated_at: datetime


class SweepResponse(BaseModel):
    """Result of an expiry sweep."""

    newly_wasted: int


class SuggestionResponse(BaseModel):
    """Autocomplete suggestions for a free-text field."""

    kind: str
    suggestions: list[str]
