"""Shared utility functions."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def epoch_ms_to_datetime(millis: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime.

    Integer arithmetic keeps the conversion exact in both directions.
    """
    return EPOCH + timedelta(milliseconds=millis)


def datetime_to_epoch_ms(moment: datetime) -> int:
    """Convert a datetime to epoch milliseconds.

    Naive datetimes are interpreted as UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - EPOCH) // timedelta(milliseconds=1)


def identity_from_location(location: Optional[str]) -> Optional[str]:
    """Extract the resource identity from a `Location` header.

    The identity is the trailing path segment after the last `/`.

    Args:
        location: Header value, e.g. "/vessels/abc123".

    Returns:
        The trailing segment, or None when no header was sent.
    """
    if location is None:
        return None
    return location.split("/")[-1]
