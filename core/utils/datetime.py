"""Datetime helpers."""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Current UTC time as a naive datetime.

    Stored timestamps are naive UTC so SQLite and Postgres round-trip them
    the same way.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
