"""Boundary checks for numeric amounts, free-text labels and dates."""

from datetime import UTC, date, datetime, time
from decimal import Decimal, InvalidOperation

from gms.config import get_settings
from gms.exceptions import ValidationError


def parse_amount(value: Decimal | int | float | str | None, field: str) -> Decimal:
    """Parse a non-negative decimal quantity or price.

    Accepts numbers and numeric strings ("2", " 5.99 "). Rejects booleans,
    non-numeric strings, NaN/infinity and negative values.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, str):
        value = value.strip()
    try:
        # str() keeps floats like 5.99 from turning into 5.9900000000000002131...
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if amount < 0:
        raise ValidationError(f"{field} must not be negative")
    return amount


def normalize_label(value: str | None, field: str, max_length: int = 255) -> str:
    """Trim a free-text value (name, unit, category) and check its shape."""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be text")
    cleaned = value.strip()
    if not cleaned:
        raise ValidationError(f"{field} must not be empty")
    if len(cleaned) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return cleaned


def to_utc(value: datetime | date) -> datetime:
    """Return an aware UTC datetime.

    Naive datetimes are read as UTC (SQLite hands back naive values). Plain
    dates mean midnight on the configured calendar.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    if isinstance(value, date):
        local_midnight = datetime.combine(value, time.min, tzinfo=get_settings().calendar_tz)
        return local_midnight.astimezone(UTC)
    raise ValidationError(f"Expected a date or datetime, got {value!r}")
