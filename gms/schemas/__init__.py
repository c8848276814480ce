"""Pydantic schemas for API requests and responses."""

from gms.schemas.auth import AuthResponse, ProfileUpdate, UserLogin, UserRegister, UserResponse
from gms.schemas.grocery import (
    GroceryCreate,
    GroceryResponse,
    GroceryUpdate,
    SuggestionResponse,
    SweepResponse,
)
from gms.schemas.shopping_list import (
    ConvertToGroceryRequest,
    ShoppingListCreate,
    ShoppingListItemCreate,
    ShoppingListItemResponse,
    ShoppingListItemUpdate,
    ShoppingListResponse,
)
from gms.schemas.wastage import (
    WastageStatisticsResponse,
    WastageSummaryResponse,
    WastageValueResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "ProfileUpdate",
    "UserResponse",
    "AuthResponse",
    "GroceryCreate",
    "GroceryUpdate",
    "GroceryResponse",
    "SweepResponse",
    "SuggestionResponse",
    "ShoppingListCreate",
    "ShoppingListResponse",
    "ShoppingListItemCreate",
    "ShoppingListItemUpdate",
    "ShoppingListItemResponse",
    "ConvertToGroceryRequest",
    "WastageStatisticsResponse",
    "WastageValueResponse",
    "WastageSummaryResponse",
]
