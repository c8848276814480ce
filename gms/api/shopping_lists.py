"""Shopping list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from gms.api.dependencies import get_current_user, get_shopping_service
from gms.models.user import User
from gms.schemas.grocery import GroceryResponse
from gms.schemas.shopping_list import (
    ConvertToGroceryRequest,
    ShoppingListCreate,
    ShoppingListItemCreate,
    ShoppingListItemResponse,
    ShoppingListItemUpdate,
    ShoppingListResponse,
)
from gms.services.shopping_service import ShoppingListService

router = APIRouter(prefix="/api/v1/shopping-lists", tags=["shopping-lists"])


@router.get("", response_model=list[ShoppingListResponse])
def list_shopping_lists(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_service)],
):
    """Shopping lists, newest first."""
    return service.list_lists(current_user)


@router.post("", response_model=ShoppingListResponse, status_code=status.HTTP_201_CREATED)
def create_shopping_list(
    list_data: ShoppingListCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_service)],
):
    """Create a shopping list."""
    return service.create_list(current_user, list_data.name)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shopping_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_service)],
):
    """Delete a shopping list and its items."""
    service.delete_list(list_id, current_user)


@router.get("/{list_id}/items", response_model=list[ShoppingListItemResponse])
def list_items(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_service)],
    include_bought: bool = True,
):
    """Items of a shopping list, by name."""
    return service.list_items(list_id, current_user, include_bought=include_bought)


@router.post(
    "/{list_id}/items",
    response_model=ShoppingListItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_item(
    list_id: int,
    item_data: ShoppingListItemCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_service)],
):
    """Add an item to a shopping list."""
    return service.add_item(list_id, current_user, **item_data.model_dump())


@router.put("/items/{item_id}", response_model=ShoppingListItemResponse)
def update_item(
    item_id: int,
    item_data: ShoppingListItemUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_service)],
):
    """Edit a shopping list item."""
    return service.update_item(item_id, current_user, **item_data.model_dump())


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_service)],
):
    """Remove an item from its shopping list."""
    service.delete_item(item_id, current_user)


@router.post(
    "/items/{item_id}/convert",
    response_model=GroceryResponse,
    status_code=status.HTTP_201_CREATED,
)
def convert_item(
    item_id: int,
    details: ConvertToGroceryRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_service)],
):
    """Mark an item bought and add it to the grocery inventory."""
    return service.convert_to_grocery(item_id, current_user, **details.model_dump())
