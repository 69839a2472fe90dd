from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Tuple

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class TeamMember:
    """One roster line captured with a field attendance entry."""

    name: str
    role: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "role": self.role}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamMember":
        return cls(name=str(data.get("name", "")), role=str(data.get("role", "")))


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one person's attendance for one calendar day."""

    record_id: str
    person_id: str
    work_date: date
    time_in: Optional[datetime] = None
    time_out: Optional[datetime] = None
    site_id: Optional[str] = None
    department: Optional[str] = None
    activities: Optional[str] = None
    image_in_url: Optional[str] = None
    image_out_url: Optional[str] = None
    members: Tuple[TeamMember, ...] = ()

    @property
    def is_open(self) -> bool:
        return self.time_in is not None and self.time_out is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.record_id,
            "person_id": self.person_id,
            "date": self.work_date.isoformat(),
            "time_in": isoformat_or_none(self.time_in),
            "time_out": isoformat_or_none(self.time_out),
            "site_id": self.site_id,
            "department": self.department,
            "activities": self.activities,
            "image_in_url": self.image_in_url,
            "image_out_url": self.image_out_url,
            "members": [m.to_dict() for m in self.members],
        }


@dataclass(frozen=True)
class AttendancePatch:
    """Partial update for an existing record.

    Fields left as None are not written. An empty roster is still a change:
    it clears the stored members.
    """

    time_out: Optional[datetime] = None
    image_out_url: Optional[str] = None
    activities: Optional[str] = None
    members: Optional[Tuple[TeamMember, ...]] = None

    def changes(self) -> Dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


def derive_status(record: Optional[AttendanceRecord]) -> AttendanceStatus:
    if record is None or record.time_in is None:
        return AttendanceStatus.ABSENT
    if record.time_out is None:
        return AttendanceStatus.ACTIVE
    return AttendanceStatus.COMPLETED


def members_from_dicts(items: Iterable[Dict[str, Any]]) -> Tuple[TeamMember, ...]:
    return tuple(TeamMember.from_dict(i) for i in items)
