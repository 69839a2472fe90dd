from __future__ import annotations

from enum import Enum


class WorkCategory(str, Enum):
    """Nature of a day's work: department-based or site-based."""

    HEAD_OFFICE = "HEAD_OFFICE"
    FIELD = "FIELD"


class AttendanceAction(str, Enum):
    TIME_IN = "time_in"
    TIME_OUT = "time_out"


class AttendanceStatus(str, Enum):
    """Derived per-day state shown to the user."""

    ABSENT = "ABSENT"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
