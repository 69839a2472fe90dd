from __future__ import annotations

from datetime import date, datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def work_date_of(moment: datetime) -> date:
    """Calendar day an attendance event belongs to."""
    return moment.date()


def isoformat_or_none(value):
    return value.isoformat() if value is not None else None
