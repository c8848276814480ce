"""Shopping list schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ShoppingListCreate(BaseModel):
    """Create a shopping list."""

    name: str = Field(..., min_length=1, max_length=255)


class ShoppingListResponse(BaseModel):
    """Shopping list response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    creation_date: datetime


class ShoppingListItemCreate(BaseModel):
    """Add an item to a shopping list."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: Decimal = Field(Decimal("1"), ge=0)
    unit: str = Field("pcs", min_length=1, max_length=50)


class ShoppingListItemUpdate(ShoppingListItemCreate):
    """Replace the fields of a shopping list item."""


class ShoppingListItemResponse(BaseModel):
    """Shopping list item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    shopping_list_id: int
    name: str
    quantity: Decimal
    unit: str
    is_bought: bool
    bought_date: datetime | None
    grocery_id: int | None


class ConvertToGroceryRequest(BaseModel):
    """Details the shopping list item does not carry."""

    price: Decimal = Field(..., ge=0)
    category: str = Field(..., min_length=1, max_length=100)
    expiry_date: datetime
