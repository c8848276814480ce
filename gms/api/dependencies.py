"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from gms.database import get_db
from gms.models.user import User
from gms.services.auth import decode_access_token
from gms.services.grocery_store import GroceryStore
from gms.services.shopping_service import ShoppingListService
from gms.services.wastage_service import WastageService

security = HTTPBearer()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def get_grocery_store(
    db: Annotated[Session, Depends(get_db)],
) -> GroceryStore:
    """Get grocery store bound to the request session."""
    return GroceryStore(db)


def get_wastage_service(
    store: Annotated[GroceryStore, Depends(get_grocery_store)],
) -> WastageService:
    """Get wastage service with dependencies."""
    return WastageService(store)


def get_shopping_service(
    store: Annotated[GroceryStore, Depends(get_grocery_store)],
) -> ShoppingListService:
    """Get shopping list service with dependencies."""
    return ShoppingListService(store)
