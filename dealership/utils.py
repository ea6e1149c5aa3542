from datetime import datetime, timezone
from decimal import Decimal


def utcnow() -> datetime:
    """
    Current UTC time as a naive datetime (how timestamps are stored).
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """
    Converts an aware datetime to naive UTC; naive values are returned unchanged.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_decimal(value) -> Decimal:
    """
    Normalizes a Numeric column / aggregate result to a Decimal (None -> 0).
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
