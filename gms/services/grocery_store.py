"""Grocery store: CRUD and owner-scoped queries over grocery records."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, date, datetime
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gms.exceptions import NotFoundError, PersistenceError
from gms.models.grocery import Grocery
from gms.models.user import User
from gms.services.validation import normalize_label, parse_amount, to_utc

logger = logging.getLogger(__name__)

Owner = User | int
Amount = Decimal | int | float | str


def owner_id_of(owner: Owner | None) -> int:
    """Resolve an owner reference (User or user id) to a user id."""
    if owner is None:
        raise NotFoundError("No current user")
    if isinstance(owner, User):
        return owner.id
    return int(owner)


def utc_now() -> datetime:
    return datetime.now(UTC)


class GroceryStore:
    """Durable CRUD and query surface over Grocery records, scoped per user.

    Each public mutation commits on its own. Inside ``transaction()`` the
    mutations are only flushed and the whole block commits once at the end.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] | None = None):
        self.db = db
        self.clock = clock or utc_now
        self._depth = 0

    # --- Transactions ---

    @contextmanager
    def store_errors(self, action: str) -> Iterator[None]:
        """Roll back and re-raise store failures as PersistenceError."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise PersistenceError(f"Failed to {action}") from e

    @contextmanager
    def transaction(self, action: str = "commit changes") -> Iterator["GroceryStore"]:
        """Group several mutations into one commit."""
        self._depth += 1
        try:
            yield self
        except Exception:
            self._depth -= 1
            if self._depth == 0:
                self.db.rollback()
            raise
        self._depth -= 1
        self._commit(action)

    def _commit(self, action: str, *instances: Grocery) -> None:
        with self.store_errors(action):
            if self._depth:
                self.db.flush()
                return
            self.db.commit()
            for instance in instances:
                self.db.refresh(instance)

    # --- CRUD ---

    def add(
        self,
        owner: Owner,
        name: str,
        purchased_date: datetime | date,
        expiry_date: datetime | date,
        price: Amount,
        quantity: Amount,
        unit: str,
        category: str,
        is_wasted: bool = False,
    ) -> Grocery:
        """Create a grocery for owner. A grocery added as wasted is wasted as of now."""
        grocery = Grocery(
            user_id=owner_id_of(owner),
            name=normalize_label(name, "name"),
            purchased_date=to_utc(purchased_date),
            expiry_date=to_utc(expiry_date),
            price=parse_amount(price, "price"),
            quantity=parse_amount(quantity, "quantity"),
            unit=normalize_label(unit, "unit", max_length=50),
            category=normalize_label(category, "category", max_length=100),
            is_wasted=bool(is_wasted),
            wasted_date=self.clock() if is_wasted else None,
        )
        self.db.add(grocery)
        self._commit("add grocery", grocery)
        logger.info(f"Added grocery {grocery.id} '{grocery.name}' for user {grocery.user_id}")
        return grocery

    def get(self, grocery_id: int, owner: Owner | None = None) -> Grocery:
        """Fetch one grocery, optionally requiring it to belong to owner."""
        with self.store_errors("load grocery"):
            query = self.db.query(Grocery).filter(Grocery.id == grocery_id)
            if owner is not None:
                query = query.filter(Grocery.user_id == owner_id_of(owner))
            grocery = query.first()
        if not grocery:
            raise NotFoundError(f"Grocery {grocery_id} not found")
        return grocery

    def update(
        self,
        grocery_id: int,
        name: str,
        expiry_date: datetime | date,
        price: Amount,
        purchased_date: datetime | date,
        quantity: Amount,
        unit: str,
        owner: Owner | None = None,
    ) -> Grocery:
        """Overwrite the editable fields.

        Wasted state, wasted date and category are left untouched.
        """
        grocery = self.get(grocery_id, owner)

        # Validate everything before touching the record
        values = {
            "name": normalize_label(name, "name"),
            "expiry_date": to_utc(expiry_date),
            "price": parse_amount(price, "price"),
            "purchased_date": to_utc(purchased_date),
            "quantity": parse_amount(quantity, "quantity"),
            "unit": normalize_label(unit, "unit", max_length=50),
        }
        for field, value in values.items():
            setattr(grocery, field, value)

        self._commit("update grocery", grocery)
        return grocery

    def delete(self, grocery_id: int, owner: Owner | None = None) -> None:
        """Remove a grocery permanently, whether active or wasted."""
        grocery = self.get(grocery_id, owner)
        self.db.delete(grocery)
        self._commit("delete grocery")
        logger.info(f"Deleted grocery {grocery_id}")

    def mark_wasted(
        self,
        grocery_id: int,
        owner: Owner | None = None,
        at: datetime | None = None,
    ) -> Grocery:
        """Flag a grocery as wasted.

        Marking an already wasted grocery keeps its original wasted date.
        Nothing in this store ever clears the flag again.
        """
        grocery = self.get(grocery_id, owner)
        wasted_at = to_utc(at) if at is not None else self.clock()
        if self.flag_wasted(grocery.id, wasted_at):
            logger.info(f"Grocery {grocery.id} '{grocery.name}' marked as wasted")
        with self.store_errors("load grocery"):
            self.db.refresh(grocery)
        return grocery

    def flag_wasted(self, grocery_id: int, wasted_at: datetime) -> bool:
        """Flip one grocery from active to wasted.

        The check and the write are one conditional UPDATE. Returns True only
        when this call made the transition.
        """
        with self.store_errors("mark grocery as wasted"):
            updated = (
                self.db.query(Grocery)
                .filter(Grocery.id == grocery_id, Grocery.is_wasted == False)  # noqa: E712
                .update(
                    {Grocery.is_wasted: True, Grocery.wasted_date: to_utc(wasted_at)},
                    synchronize_session=False,
                )
            )
        self._commit("mark grocery as wasted")
        return updated == 1

    # --- Queries ---

    def _owned(self, owner: Owner):
        return self.db.query(Grocery).filter(Grocery.user_id == owner_id_of(owner))

    def list_all(self, owner: Owner) -> list[Grocery]:
        """All groceries of owner."""
        with self.store_errors("list groceries"):
            return self._owned(owner).order_by(Grocery.id).all()

    def list_active(self, owner: Owner) -> list[Grocery]:
        """Groceries not (yet) wasted."""
        with self.store_errors("list active groceries"):
            return (
                self._owned(owner)
                .filter(Grocery.is_wasted == False)  # noqa: E712
                .order_by(Grocery.id)
                .all()
            )

    def list_wasted(self, owner: Owner) -> list[Grocery]:
        """Wasted groceries, most recently wasted first, ties in insertion order."""
        with self.store_errors("list wasted groceries"):
            return (
                self._owned(owner)
                .filter(Grocery.is_wasted == True)  # noqa: E712
                .order_by(Grocery.wasted_date.desc(), Grocery.id.asc())
                .all()
            )

    def list_soonest_expiring(
        self,
        owner: Owner,
        limit: int = 5,
        active_only: bool = False,
    ) -> list[Grocery]:
        """Groceries sorted by expiry date ascending, at most ``limit`` of them.

        Wasted groceries are included unless ``active_only`` is set, matching
        the home screen of the original app.
        """
        if limit <= 0:
            return []
        with self.store_errors("list soonest expiring groceries"):
            query = self._owned(owner)
            if active_only:
                query = query.filter(Grocery.is_wasted == False)  # noqa: E712
            return query.order_by(Grocery.expiry_date.asc(), Grocery.id.asc()).limit(limit).all()
