from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import AttendancePatch, AttendanceRecord


class AttendanceRepository(Protocol):
    """Sole owner of AttendanceRecord persistence.

    Implementations must enforce the unique (person_id, work_date) pair
    atomically: the losing insert raises ``DuplicateEntry``.
    """

    def find_by_person_and_date(self, person_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def update(self, record_id: str, patch: AttendancePatch) -> AttendanceRecord:
        """Apply ``patch``; raises ``RecordNotFound`` if the id is gone."""

        raise NotImplementedError
