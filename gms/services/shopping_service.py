"""Shopping list service, including conversion of bought items into groceries."""

import logging
from datetime import datetime
from decimal import Decimal

from gms.exceptions import NotFoundError, ValidationError
from gms.models.grocery import Grocery
from gms.models.shopping_list import ShoppingList, ShoppingListItem
from gms.services.grocery_store import Amount, GroceryStore, Owner, owner_id_of
from gms.services.validation import normalize_label, parse_amount, to_utc

logger = logging.getLogger(__name__)


class ShoppingListService:
    """Service for shopping lists and their items."""

    def __init__(self, store: GroceryStore):
        self.store = store
        self.db = store.db

    # --- Lists ---

    def create_list(self, owner: Owner, name: str) -> ShoppingList:
        shopping_list = ShoppingList(
            user_id=owner_id_of(owner),
            name=normalize_label(name, "name"),
            creation_date=self.store.clock(),
        )
        self.db.add(shopping_list)
        with self.store.store_errors("create shopping list"):
            self.db.commit()
            self.db.refresh(shopping_list)
        return shopping_list

    def list_lists(self, owner: Owner) -> list[ShoppingList]:
        """Shopping lists of owner, newest first."""
        with self.store.store_errors("list shopping lists"):
            return (
                self.db.query(ShoppingList)
                .filter(ShoppingList.user_id == owner_id_of(owner))
                .order_by(ShoppingList.creation_date.desc(), ShoppingList.id.desc())
                .all()
            )

    def get_list(self, list_id: int, owner: Owner) -> ShoppingList:
        with self.store.store_errors("load shopping list"):
            shopping_list = (
                self.db.query(ShoppingList)
                .filter(
                    ShoppingList.id == list_id,
                    ShoppingList.user_id == owner_id_of(owner),
                )
                .first()
            )
        if not shopping_list:
            raise NotFoundError(f"Shopping list {list_id} not found")
        return shopping_list

    def delete_list(self, list_id: int, owner: Owner) -> None:
        """Delete a list and its items. Groceries converted from it stay."""
        shopping_list = self.get_list(list_id, owner)
        self.db.delete(shopping_list)
        with self.store.store_errors("delete shopping list"):
            self.db.commit()

    # --- Items ---

    def _get_item(self, item_id: int, owner: Owner) -> ShoppingListItem:
        with self.store.store_errors("load shopping list item"):
            item = (
                self.db.query(ShoppingListItem)
                .join(ShoppingList, ShoppingListItem.shopping_list_id == ShoppingList.id)
                .filter(
                    ShoppingListItem.id == item_id,
                    ShoppingList.user_id == owner_id_of(owner),
                )
                .first()
            )
        if not item:
            raise NotFoundError(f"Shopping list item {item_id} not found")
        return item

    def list_items(
        self, list_id: int, owner: Owner, include_bought: bool = True
    ) -> list[ShoppingListItem]:
        """Items of a list ordered by name."""
        self.get_list(list_id, owner)
        with self.store.store_errors("list shopping list items"):
            query = self.db.query(ShoppingListItem).filter(
                ShoppingListItem.shopping_list_id == list_id
            )
            if not include_bought:
                query = query.filter(ShoppingListItem.is_bought == False)  # noqa: E712
            return query.order_by(ShoppingListItem.name, ShoppingListItem.id).all()

    def add_item(
        self,
        list_id: int,
        owner: Owner,
        name: str,
        quantity: Amount,
        unit: str = "pcs",
    ) -> ShoppingListItem:
        shopping_list = self.get_list(list_id, owner)
        item = ShoppingListItem(
            shopping_list_id=shopping_list.id,
            name=normalize_label(name, "name"),
            quantity=parse_amount(quantity, "quantity"),
            unit=normalize_label(unit, "unit", max_length=50),
            is_bought=False,
        )
        self.db.add(item)
        with self.store.store_errors("add shopping list item"):
            self.db.commit()
            self.db.refresh(item)
        return item

    def update_item(
        self,
        item_id: int,
        owner: Owner,
        name: str,
        quantity: Amount,
        unit: str,
    ) -> ShoppingListItem:
        item = self._get_item(item_id, owner)
        values = {
            "name": normalize_label(name, "name"),
            "quantity": parse_amount(quantity, "quantity"),
            "unit": normalize_label(unit, "unit", max_length=50),
        }
        for field, value in values.items():
            setattr(item, field, value)
        with self.store.store_errors("update shopping list item"):
            self.db.commit()
            self.db.refresh(item)
        return item

    def delete_item(self, item_id: int, owner: Owner) -> None:
        item = self._get_item(item_id, owner)
        self.db.delete(item)
        with self.store.store_errors("delete shopping list item"):
            self.db.commit()

    def convert_to_grocery(
        self,
        item_id: int,
        owner: Owner,
        price: Amount,
        category: str,
        expiry_date: datetime,
        now: datetime | None = None,
    ) -> Grocery:
        """Turn a shopping list item into a grocery purchased now.

        Name, quantity and unit come from the item; price, category and expiry
        from the caller. The item is marked bought and linked to the new
        grocery in the same commit.
        """
        item = self._get_item(item_id, owner)
        if item.is_bought:
            raise ValidationError(f"Shopping list item {item_id} is already bought")

        purchased = to_utc(now) if now is not None else self.store.clock()

        with self.store.transaction("convert shopping list item to grocery"):
            grocery = self.store.add(
                owner,
                name=item.name,
                purchased_date=purchased,
                expiry_date=expiry_date,
                price=price,
                quantity=Decimal(item.quantity),
                unit=item.unit,
                category=category,
                is_wasted=False,
            )
            item.is_bought = True
            item.bought_date = purchased
            item.grocery_id = grocery.id

        self.db.refresh(grocery)
        logger.info(f"Shopping list item {item.id} converted to grocery {grocery.id}")
        return grocery
