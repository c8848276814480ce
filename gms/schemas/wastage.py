"""Wastage statistics schemas."""

from decimal import Decimal

from pydantic import BaseModel

from gms.schemas.grocery import GroceryResponse


class WastageStatisticsResponse(BaseModel):
    """Counts of wasted groceries."""

    total: int
    this_month: int
    this_week: int


class WastageValueResponse(BaseModel):
    """Money lost to wastage in one period."""

    period: str
    value: Decimal


class WastageSummaryResponse(WastageStatisticsResponse):
    """Counts, value per period and the most recently wasted groceries."""

    values: dict[str, Decimal]
    recent: list[GroceryResponse]
