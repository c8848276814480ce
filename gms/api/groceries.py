"""Grocery API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from gms.api.dependencies import get_current_user, get_grocery_store
from gms.config import get_settings
from gms.models.user import User
from gms.schemas.grocery import (
    GroceryCreate,
    GroceryResponse,
    GroceryUpdate,
    SuggestionResponse,
)
from gms.services.grocery_store import GroceryStore
from gms.services.suggestions import SUGGESTION_KINDS, suggest

router = APIRouter(prefix="/api/v1/groceries", tags=["groceries"])


@router.get("", response_model=list[GroceryResponse])
def list_groceries(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[GroceryStore, Depends(get_grocery_store)],
    wasted: bool | None = Query(default=None, description="Filter on wasted state"),
):
    """List the current user's groceries.

    ``wasted=false`` gives the active ones, ``wasted=true`` the wasted ones
    (most recently wasted first).
    """
    if wasted is None:
        return store.list_all(current_user)
    if wasted:
        return store.list_wasted(current_user)
    return store.list_active(current_user)


@router.get("/soonest-expiring", response_model=list[GroceryResponse])
def list_soonest_expiring(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[GroceryStore, Depends(get_grocery_store)],
    limit: int | None = None,
    active_only: bool = False,
):
    """Groceries with the nearest expiry dates."""
    if limit is None:
        limit = get_settings().soonest_expiring_limit
    return store.list_soonest_expiring(current_user, limit=limit, active_only=active_only)


@router.get("/suggestions/{kind}", response_model=SuggestionResponse)
def get_suggestions(
    kind: str,
    current_user: Annotated[User, Depends(get_current_user)],
    prefix: str = "",
):
    """Autocomplete for units, categories and diets."""
    options = SUGGESTION_KINDS.get(kind)
    if options is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown suggestion kind '{kind}'",
        )
    return SuggestionResponse(kind=kind, suggestions=suggest(options, prefix))


@router.post("", response_model=GroceryResponse, status_code=status.HTTP_201_CREATED)
def create_grocery(
    grocery_data: GroceryCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[GroceryStore, Depends(get_grocery_store)],
):
    """Record a purchased grocery."""
    return store.add(current_user, **grocery_data.model_dump())


@router.get("/{grocery_id}", response_model=GroceryResponse)
def get_grocery(
    grocery_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[GroceryStore, Depends(get_grocery_store)],
):
    """Get a specific grocery."""
    return store.get(grocery_id, current_user)


@router.put("/{grocery_id}", response_model=GroceryResponse)
def update_grocery(
    grocery_id: int,
    grocery_data: GroceryUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[GroceryStore, Depends(get_grocery_store)],
):
    """Update a grocery."""
    return store.update(grocery_id, owner=current_user, **grocery_data.model_dump())


@router.delete("/{grocery_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_grocery(
    grocery_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[GroceryStore, Depends(get_grocery_store)],
):
    """Delete a grocery, active or wasted."""
    store.delete(grocery_id, current_user)


@router.post("/{grocery_id}/waste", response_model=GroceryResponse)
def mark_grocery_wasted(
    grocery_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[GroceryStore, Depends(get_grocery_store)],
):
    """Mark a grocery as wasted. There is no way back to active."""
    return store.mark_wasted(grocery_id, current_user)
