"""SQLAlchemy models."""

from gms.models.grocery import Grocery
from gms.models.shopping_list import ShoppingList, ShoppingListItem
from gms.models.user import User

__all__ = [
    "User",
    "Grocery",
    "ShoppingList",
    "ShoppingListItem",
]
