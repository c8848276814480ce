"""Tests for the grocery store."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from gms.exceptions import NotFoundError, PersistenceError, ValidationError
from gms.models.grocery import Grocery
from gms.services.grocery_store import GroceryStore
from gms.services.validation import to_utc


def add_grocery(store, owner, name="Milk", expiry_date=None, price="5.99", **kwargs):
    """Add a grocery with sensible defaults."""
    purchased = kwargs.pop("purchased_date", datetime(2026, 10, 1, tzinfo=UTC))
    return store.add(
        owner,
        name=name,
        purchased_date=purchased,
        expiry_date=expiry_date or datetime(2026, 10, 20, tzinfo=UTC),
        price=price,
        quantity=kwargs.pop("quantity", "1"),
        unit=kwargs.pop("unit", "L"),
        category=kwargs.pop("category", "Dairy"),
        **kwargs,
    )


def test_add_grocery_is_active(store, user):
    """Test that a new grocery is listed once and not wasted."""
    grocery = add_grocery(store, user)

    groceries = store.list_all(user)
    assert [g.id for g in groceries] == [grocery.id]
    stored = groceries[0]
    assert stored.name == "Milk"
    assert stored.price == Decimal("5.99")
    assert stored.quantity == Decimal("1")
    assert stored.unit == "L"
    assert stored.category == "Dairy"
    assert stored.is_wasted is False
    assert stored.wasted_date is None


def test_add_grocery_as_wasted_sets_wasted_date(store, user, now):
    """Test that adding an already wasted grocery stamps the wasted date."""
    grocery = add_grocery(store, user, is_wasted=True)

    assert grocery.is_wasted is True
    assert to_utc(grocery.wasted_date) == now


def test_add_grocery_assigns_fresh_ids(store, user):
    """Test that every add creates a new record."""
    first = add_grocery(store, user, name="Milk")
    second = add_grocery(store, user, name="Milk")

    assert first.id != second.id
    assert len(store.list_all(user)) == 2


def test_add_grocery_parses_numeric_strings(store, user):
    """Test that quantity and price may arrive as text."""
    grocery = add_grocery(store, user, price=" 3.49 ", quantity="12")

    assert grocery.price == Decimal("3.49")
    assert grocery.quantity == Decimal("12")


@pytest.mark.parametrize(
    "field,value",
    [
        ("price", "abc"),
        ("price", "-1"),
        ("quantity", "two"),
        ("quantity", float("nan")),
        ("quantity", True),
    ],
)
def test_add_grocery_rejects_bad_amounts(store, user, field, value):
    """Test that malformed or negative amounts raise ValidationError."""
    with pytest.raises(ValidationError):
        add_grocery(store, user, **{field: value})

    assert store.list_all(user) == []


def test_add_grocery_rejects_blank_unit(store, user):
    """Test that unit and category must not be blank."""
    with pytest.raises(ValidationError):
        add_grocery(store, user, unit="  ")
    with pytest.raises(ValidationError):
        add_grocery(store, user, category="")


def test_add_grocery_keeps_free_text_unit(store, user):
    """Test that units outside the suggestion list are accepted."""
    grocery = add_grocery(store, user, unit="bunch", category="Herbs")

    assert grocery.unit == "bunch"
    assert grocery.category == "Herbs"


def test_add_grocery_without_owner(store):
    """Test that there must be a current user."""
    with pytest.raises(NotFoundError):
        add_grocery(store, None)


def test_update_grocery(store, user):
    """Test that update overwrites the editable fields."""
    grocery = add_grocery(store, user)
    new_expiry = datetime(2026, 11, 1, tzinfo=UTC)

    store.update(
        grocery.id,
        name="Oat Milk",
        expiry_date=new_expiry,
        price="4.50",
        purchased_date=datetime(2026, 10, 2, tzinfo=UTC),
        quantity="2",
        unit="ml",
    )

    updated = store.get(grocery.id)
    assert updated.name == "Oat Milk"
    assert to_utc(updated.expiry_date) == new_expiry
    assert updated.price == Decimal("4.50")
    assert updated.quantity == Decimal("2")
    assert updated.unit == "ml"


def test_update_leaves_category_and_wasted_state(store, user, now):
    """Test that update never touches category or wasted fields."""
    grocery = add_grocery(store, user, category="Dairy")
    store.mark_wasted(grocery.id)

    store.update(
        grocery.id,
        name="Milk",
        expiry_date=datetime(2027, 1, 1, tzinfo=UTC),
        price="5.99",
        purchased_date=datetime(2026, 10, 1, tzinfo=UTC),
        quantity="1",
        unit="L",
    )

    updated = store.get(grocery.id)
    assert updated.category == "Dairy"
    assert updated.is_wasted is True
    assert to_utc(updated.wasted_date) == now


def test_update_with_bad_price_changes_nothing(store, user):
    """Test that a failed validation leaves the record as it was."""
    grocery = add_grocery(store, user, name="Milk")

    with pytest.raises(ValidationError):
        store.update(
            grocery.id,
            name="Changed",
            expiry_date=datetime(2026, 11, 1, tzinfo=UTC),
            price="free",
            purchased_date=datetime(2026, 10, 1, tzinfo=UTC),
            quantity="1",
            unit="L",
        )

    assert store.get(grocery.id).name == "Milk"


def test_update_unknown_grocery(store):
    """Test that updating an unknown id raises NotFoundError."""
    with pytest.raises(NotFoundError):
        store.update(
            99999,
            name="Ghost",
            expiry_date=datetime(2026, 11, 1, tzinfo=UTC),
            price="1",
            purchased_date=datetime(2026, 10, 1, tzinfo=UTC),
            quantity="1",
            unit="pcs",
        )


def test_delete_grocery(store, user):
    """Test deleting a grocery."""
    grocery = add_grocery(store, user)

    store.delete(grocery.id)

    assert store.list_all(user) == []
    with pytest.raises(NotFoundError):
        store.get(grocery.id)


def test_delete_wasted_grocery(store, user):
    """Test that wasted groceries can be deleted too."""
    grocery = add_grocery(store, user)
    store.mark_wasted(grocery.id)

    store.delete(grocery.id)

    assert store.list_wasted(user) == []


def test_delete_nonexistent_grocery(store):
    """Test that deleting an unknown id fails instead of silently succeeding."""
    with pytest.raises(NotFoundError):
        store.delete(99999)


def test_delete_other_users_grocery(store, user, other_user):
    """Test that owner-scoped delete does not reach other users' groceries."""
    grocery = add_grocery(store, user)

    with pytest.raises(NotFoundError):
        store.delete(grocery.id, owner=other_user)

    assert len(store.list_all(user)) == 1


def test_lists_are_scoped_per_owner(store, user, other_user):
    """Test that queries only return the owner's groceries."""
    add_grocery(store, user, name="Milk")
    add_grocery(store, other_user, name="Eggs")

    assert [g.name for g in store.list_all(user)] == ["Milk"]
    assert [g.name for g in store.list_all(other_user.id)] == ["Eggs"]


def test_list_active_and_wasted(store, user):
    """Test filtering on the wasted flag."""
    milk = add_grocery(store, user, name="Milk")
    bread = add_grocery(store, user, name="Bread")
    store.mark_wasted(bread.id)

    assert [g.id for g in store.list_active(user)] == [milk.id]
    assert [g.id for g in store.list_wasted(user)] == [bread.id]


def test_list_wasted_most_recent_first(store, user):
    """Test wasted ordering: newest waste first, ties in insertion order."""
    older = add_grocery(store, user, name="Older")
    tie_a = add_grocery(store, user, name="Tie A")
    tie_b = add_grocery(store, user, name="Tie B")
    newest = add_grocery(store, user, name="Newest")

    store.mark_wasted(older.id, at=datetime(2026, 10, 1, tzinfo=UTC))
    store.mark_wasted(tie_b.id, at=datetime(2026, 10, 5, tzinfo=UTC))
    store.mark_wasted(tie_a.id, at=datetime(2026, 10, 5, tzinfo=UTC))
    store.mark_wasted(newest.id, at=datetime(2026, 10, 9, tzinfo=UTC))

    assert [g.name for g in store.list_wasted(user)] == ["Newest", "Tie A", "Tie B", "Older"]


def test_list_soonest_expiring(store, user):
    """Test that at most `limit` groceries come back, soonest expiry first."""
    base = datetime(2026, 10, 15, tzinfo=UTC)
    for days, name in [(4, "D"), (1, "A"), (3, "C"), (2, "B"), (5, "E")]:
        add_grocery(store, user, name=name, expiry_date=base + timedelta(days=days))

    soonest = store.list_soonest_expiring(user, limit=3)

    assert [g.name for g in soonest] == ["A", "B", "C"]


def test_list_soonest_expiring_default_limit(store, user):
    """Test the default limit of five."""
    base = datetime(2026, 10, 15, tzinfo=UTC)
    for days in range(7):
        add_grocery(store, user, name=f"Item {days}", expiry_date=base + timedelta(days=days))

    assert len(store.list_soonest_expiring(user)) == 5


def test_list_soonest_expiring_fewer_than_limit(store, user):
    """Test that all groceries come back when there are fewer than the limit."""
    add_grocery(store, user, name="Only")

    assert [g.name for g in store.list_soonest_expiring(user, limit=3)] == ["Only"]


@pytest.mark.parametrize("limit", [0, -2])
def test_list_soonest_expiring_non_positive_limit(store, user, limit):
    """Test that a non-positive limit yields nothing."""
    add_grocery(store, user)

    assert store.list_soonest_expiring(user, limit=limit) == []


def test_list_soonest_expiring_includes_wasted_by_default(store, user):
    """Test that wasted groceries are only excluded on request."""
    old = add_grocery(store, user, name="Old", expiry_date=datetime(2026, 9, 1, tzinfo=UTC))
    add_grocery(store, user, name="Fresh", expiry_date=datetime(2026, 10, 20, tzinfo=UTC))
    store.mark_wasted(old.id)

    assert [g.name for g in store.list_soonest_expiring(user)] == ["Old", "Fresh"]
    assert [g.name for g in store.list_soonest_expiring(user, active_only=True)] == ["Fresh"]


def test_mark_wasted(store, user, now):
    """Test marking a grocery as wasted."""
    grocery = add_grocery(store, user)

    store.mark_wasted(grocery.id)

    wasted = store.get(grocery.id)
    assert wasted.is_wasted is True
    assert to_utc(wasted.wasted_date) == now


def test_mark_wasted_twice_keeps_first_date(db, user):
    """Test that re-marking a wasted grocery keeps its original wasted date."""
    first = datetime(2026, 10, 10, tzinfo=UTC)
    clock = MagicMock(return_value=first)
    store = GroceryStore(db, clock=clock)
    grocery = add_grocery(store, user)

    store.mark_wasted(grocery.id)
    clock.return_value = datetime(2026, 10, 12, tzinfo=UTC)
    store.mark_wasted(grocery.id)

    assert to_utc(store.get(grocery.id).wasted_date) == first


def test_mark_wasted_unknown_grocery(store):
    """Test that marking an unknown id raises NotFoundError."""
    with pytest.raises(NotFoundError):
        store.mark_wasted(99999)


def test_plain_dates_are_accepted(store, user):
    """Test that calendar dates are stored as midnight UTC on the default calendar."""
    grocery = store.add(
        user,
        name="Eggs",
        purchased_date=datetime(2026, 10, 1).date(),
        expiry_date=datetime(2026, 10, 28).date(),
        price="3.49",
        quantity="12",
        unit="pcs",
        category="Dairy",
    )

    assert to_utc(grocery.expiry_date) == datetime(2026, 10, 28, tzinfo=UTC)


def test_commit_failure_raises_persistence_error():
    """Test that a failed write is surfaced and rolled back, not swallowed."""
    db = MagicMock()
    db.commit.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))
    store = GroceryStore(db)

    with pytest.raises(PersistenceError):
        store.add(
            1,
            name="Milk",
            purchased_date=datetime(2026, 10, 1, tzinfo=UTC),
            expiry_date=datetime(2026, 10, 8, tzinfo=UTC),
            price="5.99",
            quantity="1",
            unit="L",
            category="Dairy",
        )

    db.rollback.assert_called_once()
    db.refresh.assert_not_called()


def test_read_failure_raises_persistence_error():
    """Test that a failed read is not mistaken for an empty result."""
    db = MagicMock()
    db.query.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
    store = GroceryStore(db)

    with pytest.raises(PersistenceError):
        store.list_wasted(1)


def test_transaction_rolls_back_everything(store, user):
    """Test that an error inside a transaction discards all its changes."""
    with pytest.raises(ValidationError):
        with store.transaction():
            add_grocery(store, user, name="Kept?")
            add_grocery(store, user, name="Broken", price="n/a")

    assert store.list_all(user) == []


def test_transaction_commits_once(store, user, db):
    """Test that a transaction persists all of its changes together."""
    with store.transaction():
        add_grocery(store, user, name="Milk")
        add_grocery(store, user, name="Bread")

    db.expire_all()
    assert sorted(g.name for g in db.query(Grocery).all()) == ["Bread", "Milk"]


def test_mark_wasted_from_stale_session_keeps_first_date(store, second_db, user, now):
    """Test that a writer holding an old view cannot overwrite the wasted date."""
    grocery = add_grocery(store, user)
    later_store = GroceryStore(second_db, clock=lambda: now + timedelta(days=20))
    assert [g.id for g in later_store.list_active(user.id)] == [grocery.id]

    store.mark_wasted(grocery.id)
    stale = later_store.mark_wasted(grocery.id)

    assert stale.is_wasted is True
    assert to_utc(stale.wasted_date) == now
    assert to_utc(store.get(grocery.id).wasted_date) == now


def test_flag_wasted_reports_only_its_own_transition(store, second_db, user, now):
    """Test that only one of two writers is credited with the transition."""
    grocery = add_grocery(store, user)
    other_store = GroceryStore(second_db, clock=lambda: now)
    other_store.list_active(user.id)

    assert store.flag_wasted(grocery.id, now) is True
    assert other_store.flag_wasted(grocery.id, now + timedelta(days=1)) is False
    assert to_utc(store.get(grocery.id).wasted_date) == now
