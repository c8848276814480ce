"""Wastage service: expiry sweep and wastage statistics."""

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any
from zoneinfo import ZoneInfo

from gms.config import get_settings
from gms.exceptions import ValidationError
from gms.models.enums import WastagePeriod
from gms.models.grocery import Grocery
from gms.services.grocery_store import GroceryStore, Owner, owner_id_of
from gms.services.validation import to_utc

logger = logging.getLogger(__name__)


class WastageService:
    """Derive wastage events and statistics from grocery store state.

    Nothing is persisted here except through GroceryStore mutations. A wasted
    grocery never becomes active again; the only way out is deletion.
    """

    def __init__(self, store: GroceryStore, calendar_tz: ZoneInfo | None = None):
        self.store = store
        self.calendar_tz = calendar_tz or get_settings().calendar_tz

    def _as_of(self, as_of: datetime | None) -> datetime:
        return to_utc(as_of) if as_of is not None else self.store.clock()

    def sweep_expired(self, owner: Owner, as_of: datetime | None = None) -> int:
        """Mark every active grocery that expired before ``as_of`` as wasted.

        Returns the number of groceries transitioned by this call. Groceries
        another writer wasted in the meantime are not counted. The sweep
        commits as a single unit.
        """
        as_of = self._as_of(as_of)
        expired = [g for g in self.store.list_active(owner) if to_utc(g.expiry_date) < as_of]
        if not expired:
            return 0

        transitioned = 0
        with self.store.transaction("sweep expired groceries"):
            for grocery in expired:
                if self.store.flag_wasted(grocery.id, as_of):
                    transitioned += 1

        logger.info(
            f"Expiry sweep marked {transitioned} groceries as wasted for user {owner_id_of(owner)}"
        )
        return transitioned

    # --- Statistics ---

    def _in_period(self, wasted_date: datetime, period: WastagePeriod, as_of: datetime) -> bool:
        """Period granularity match on the local calendar.

        Both the period index and the year have to agree, so last year's
        October is not "this month".
        """
        if period == WastagePeriod.ALL_TIME:
            return True

        local = to_utc(wasted_date).astimezone(self.calendar_tz)
        now = as_of.astimezone(self.calendar_tz)

        if period == WastagePeriod.THIS_WEEK:
            # ISO week numbers belong to the ISO year, not the calendar year
            return local.isocalendar()[:2] == now.isocalendar()[:2]
        if period == WastagePeriod.THIS_MONTH:
            return (local.year, local.month) == (now.year, now.month)
        if period == WastagePeriod.THIS_YEAR:
            return local.year == now.year
        raise ValidationError(f"Unknown wastage period: {period!r}")

    def _wasted_in(
        self, wasted: list[Grocery], period: WastagePeriod, as_of: datetime
    ) -> list[Grocery]:
        return [g for g in wasted if self._in_period(g.wasted_date, period, as_of)]

    def statistics(self, owner: Owner, as_of: datetime | None = None) -> dict[str, int]:
        """Count wasted groceries overall, this month and this week.

        Returns:
            {"total": int, "this_month": int, "this_week": int}
        """
        as_of = self._as_of(as_of)
        wasted = self.store.list_wasted(owner)
        return {
            "total": len(wasted),
            "this_month": len(self._wasted_in(wasted, WastagePeriod.THIS_MONTH, as_of)),
            "this_week": len(self._wasted_in(wasted, WastagePeriod.THIS_WEEK, as_of)),
        }

    def wastage_value(
        self,
        owner: Owner,
        period: WastagePeriod | str,
        as_of: datetime | None = None,
    ) -> Decimal:
        """Total price of groceries wasted in ``period``; zero when none match."""
        try:
            period = WastagePeriod(period)
        except ValueError:
            raise ValidationError(f"Unknown wastage period: {period!r}") from None
        as_of = self._as_of(as_of)
        matching = self._wasted_in(self.store.list_wasted(owner), period, as_of)
        return sum((Decimal(g.price) for g in matching), Decimal("0"))

    def wastage_summary(self, owner: Owner, as_of: datetime | None = None) -> dict[str, Any]:
        """Counts and money lost per period from a single read of the wasted set."""
        as_of = self._as_of(as_of)
        wasted = self.store.list_wasted(owner)

        values = {}
        for period in WastagePeriod:
            matching = self._wasted_in(wasted, period, as_of)
            values[period.value] = sum((Decimal(g.price) for g in matching), Decimal("0"))

        return {
            "total": len(wasted),
            "this_month": len(self._wasted_in(wasted, WastagePeriod.THIS_MONTH, as_of)),
            "this_week": len(self._wasted_in(wasted, WastagePeriod.THIS_WEEK, as_of)),
            "values": values,
            "recent": wasted[:5],
        }

    def expiring_soon(
        self,
        owner: Owner,
        within_days: int | None = None,
        as_of: datetime | None = None,
    ) -> list[Grocery]:
        """Active groceries expiring between ``as_of`` and ``as_of + within_days``."""
        if within_days is None:
            within_days = get_settings().near_expiry_days
        as_of = self._as_of(as_of)
        horizon = as_of + timedelta(days=within_days)

        soon = [
            g for g in self.store.list_active(owner) if as_of <= to_utc(g.expiry_date) <= horizon
        ]
        return sorted(soon, key=lambda g: (to_utc(g.expiry_date), g.id))
