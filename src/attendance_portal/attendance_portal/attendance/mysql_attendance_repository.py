from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Dict, Optional

import mysql.connector

from ..core.exceptions import AlreadyTimedOut, DuplicateEntry, RecordNotFound
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, is_duplicate_key, load_json_list
from .model import AttendancePatch, AttendanceRecord, members_from_dicts
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = (
    "record_id, person_id, work_date, time_in, time_out, site_id, department, "
    "activities, image_in_url, image_out_url, members"
)

# Only these columns are writable after creation.
_PATCHABLE_COLUMNS = ("time_out", "image_out_url", "activities", "members")


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["record_id"]),
        person_id=str(r["person_id"]),
        work_date=r["work_date"],
        time_in=r.get("time_in"),
        time_out=r.get("time_out"),
        site_id=r.get("site_id"),
        department=r.get("department"),
        activities=r.get("activities"),
        image_in_url=r.get("image_in_url"),
        image_out_url=r.get("image_out_url"),
        members=members_from_dicts(load_json_list(r.get("members"))),
    )


def _dump_members(members) -> str:
    return json.dumps([m.to_dict() for m in members])


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_person_and_date(self, person_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE person_id=%s AND work_date=%s",
                (person_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        record_id, person_id, work_date, time_in, time_out, site_id, department,
                        activities, image_in_url, image_out_url, members
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.record_id,
                        record.person_id,
                        record.work_date,
                        record.time_in,
                        record.time_out,
                        record.site_id,
                        record.department,
                        record.activities,
                        record.image_in_url,
                        record.image_out_url,
                        _dump_members(record.members),
                    ),
                )
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                logger.info("Duplicate attendance insert for person %s on %s", record.person_id, record.work_date)
                raise DuplicateEntry("An attendance record already exists for this day") from e
            raise
        return record

    def update(self, record_id: str, patch: AttendancePatch) -> AttendanceRecord:
        changes = patch.changes()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s FOR UPDATE",
                (record_id,),
            )
            locked = fetchone(cur)
            if not locked:
                raise RecordNotFound("Attendance record no longer exists")
            # A closed record is final; a concurrent time-out may have won the lock.
            if "time_out" in changes and locked.get("time_out") is not None:
                logger.info("Time-out lost for record %s: already closed", record_id)
                raise AlreadyTimedOut("You have already timed out for today.")

            if changes:
                assignments = []
                params: list[object] = []
                for column in _PATCHABLE_COLUMNS:
                    if column not in changes:
                        continue
                    value = changes[column]
                    assignments.append(f"{column}=%s")
                    params.append(_dump_members(value) if column == "members" else value)
                params.append(record_id)
                cur.execute(
                    f"UPDATE attendance_records SET {', '.join(assignments)} WHERE record_id=%s",
                    tuple(params),
                )

            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (record_id,))
            return _to_record(fetchone(cur))
