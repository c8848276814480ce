"""Enums for model fields and service parameters."""

from enum import Enum


class WastagePeriod(str, Enum):
    """Time windows used to bucket wasted groceries."""

    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    THIS_YEAR = "this_year"
    ALL_TIME = "all_time"
