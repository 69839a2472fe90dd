from datetime import date, datetime

from src.attendance_portal.attendance_portal.attendance.model import (
    AttendancePatch,
    AttendanceRecord,
    TeamMember,
    derive_status,
)
from src.attendance_portal.attendance_portal.core.enums import AttendanceStatus


def _record(**kw):
    base = dict(record_id="r1", person_id="p1", work_date=date(2026, 2, 2))
    base.update(kw)
    return AttendanceRecord(**base)


def test_derive_status_absent_active_completed():
    assert derive_status(None) == AttendanceStatus.ABSENT
    assert derive_status(_record(time_in=datetime(2026, 2, 2, 8, 0))) == AttendanceStatus.ACTIVE
    assert (
        derive_status(_record(time_in=datetime(2026, 2, 2, 8, 0), time_out=datetime(2026, 2, 2, 17, 0)))
        == AttendanceStatus.COMPLETED
    )


def test_patch_only_reports_fields_that_were_set():
    assert AttendancePatch().changes() == {}
    assert AttendancePatch(activities=None).changes() == {}
    assert AttendancePatch(members=()).changes() == {"members": ()}


def test_record_to_dict_shape():
    rec = _record(
        time_in=datetime(2026, 2, 2, 8, 0),
        department="Logistics",
        members=(TeamMember("Ana", "Rigger"), TeamMember("Ben", "Driver")),
    )

    data = rec.to_dict()

    assert data["id"] == "r1"
    assert data["date"] == "2026-02-02"
    assert data["time_in"] == "2026-02-02T08:00:00"
    assert data["time_out"] is None
    assert data["members"] == [{"name": "Ana", "role": "Rigger"}, {"name": "Ben", "role": "Driver"}]
