from __future__ import annotations

import json
from datetime import date, datetime

import mysql.connector
import pytest
from mysql.connector import errorcode

from src.attendance_portal.attendance_portal.attendance.model import AttendancePatch, AttendanceRecord, TeamMember
from src.attendance_portal.attendance_portal.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.attendance_portal.attendance_portal.core.exceptions import AlreadyTimedOut, DuplicateEntry, RecordNotFound, Timeout
from src.attendance_portal.attendance_portal.database.mysql_base import db_cursor, load_json_list


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn

    def execute(self, sql, params=None):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.execute_error:
            raise self._conn.execute_error

    def fetchone(self):
        return self._conn.rows.pop(0) if self._conn.rows else None

    def fetchall(self):
        rows, self._conn.rows = self._conn.rows, []
        return rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, *, rows=None, execute_error=None):
        self.rows = list(rows or [])
        self.execute_error = execute_error
        self.executed: list[tuple[str, object]] = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, conn=None, connect_error=None):
        self.conn = conn or FakeConnection()
        self.connect_error = connect_error

    def connect(self):
        if self.connect_error:
            raise self.connect_error
        return self.conn


def _row(**kw):
    row = {
        "record_id": "r1",
        "person_id": "p1",
        "work_date": date(2026, 2, 2),
        "time_in": datetime(2026, 2, 2, 8, 0),
        "time_out": None,
        "site_id": None,
        "department": "Logistics",
        "activities": None,
        "image_in_url": "https://x/in.jpg",
        "image_out_url": None,
        "members": '[{"name": "Ana", "role": "Rigger"}]',
    }
    row.update(kw)
    return row


def test_load_json_list_accepts_driver_variants():
    assert load_json_list(None) == []
    assert load_json_list("") == []
    assert load_json_list(b'[{"name": "A", "role": "B"}]') == [{"name": "A", "role": "B"}]
    assert load_json_list([1]) == [1]


def test_db_cursor_commits_and_closes():
    factory = FakeConnFactory()

    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")

    assert factory.conn.committed and factory.conn.closed


def test_db_cursor_maps_lost_connection_to_timeout():
    err = mysql.connector.errors.OperationalError(msg="Lost connection", errno=errorcode.CR_SERVER_LOST)
    factory = FakeConnFactory(FakeConnection(execute_error=err))

    with pytest.raises(Timeout):
        with db_cursor(factory) as (_, cur):
            cur.execute("SELECT 1")

    assert factory.conn.rolled_back and factory.conn.closed


def test_db_cursor_maps_connect_timeout():
    err = mysql.connector.errors.InterfaceError(msg="Can't connect: timed out", errno=2003)

    with pytest.raises(Timeout):
        with db_cursor(FakeConnFactory(connect_error=err)):
            pass


def test_find_maps_row_to_record():
    repo = MySQLAttendanceRepository(FakeConnFactory(FakeConnection(rows=[_row()])))

    rec = repo.find_by_person_and_date("p1", date(2026, 2, 2))

    assert rec.record_id == "r1"
    assert rec.department == "Logistics"
    assert rec.members == (TeamMember("Ana", "Rigger"),)


def test_create_serializes_members_as_json():
    conn = FakeConnection()
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))
    rec = AttendanceRecord(
        record_id="r1",
        person_id="p1",
        work_date=date(2026, 2, 2),
        time_in=datetime(2026, 2, 2, 8, 0),
        members=(TeamMember("Ana", "Rigger"),),
    )

    assert repo.create(rec) is rec

    _, params = conn.executed[0]
    assert json.loads(params[-1]) == [{"name": "Ana", "role": "Rigger"}]
    assert conn.committed


def test_create_duplicate_key_raises_duplicate_entry():
    err = mysql.connector.errors.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    repo = MySQLAttendanceRepository(FakeConnFactory(FakeConnection(execute_error=err)))
    rec = AttendanceRecord(record_id="r1", person_id="p1", work_date=date(2026, 2, 2))

    with pytest.raises(DuplicateEntry):
        repo.create(rec)


def test_update_missing_record_raises_record_not_found():
    conn = FakeConnection(rows=[])
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    with pytest.raises(RecordNotFound):
        repo.update("gone", AttendancePatch(time_out=datetime(2026, 2, 2, 17, 0)))

    assert conn.rolled_back


def test_update_writes_only_patched_columns():
    out = datetime(2026, 2, 2, 17, 0)
    conn = FakeConnection(rows=[_row(), _row(time_out=out, image_out_url="https://x/out.jpg", members="[]")])
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    rec = repo.update("r1", AttendancePatch(time_out=out, image_out_url="https://x/out.jpg", members=()))

    sql, params = conn.executed[1]
    assert sql == "UPDATE attendance_records SET time_out=%s, image_out_url=%s, members=%s WHERE record_id=%s"
    assert params == (out, "https://x/out.jpg", "[]", "r1")
    assert rec.time_out == out
    assert rec.members == ()


def test_update_refuses_to_close_a_record_twice():
    first_out = datetime(2026, 2, 2, 17, 0)
    conn = FakeConnection(rows=[_row(time_out=first_out, image_out_url="https://x/out1.jpg")])
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    with pytest.raises(AlreadyTimedOut):
        repo.update("r1", AttendancePatch(time_out=datetime(2026, 2, 2, 17, 5), image_out_url="https://x/out2.jpg"))

    assert len(conn.executed) == 1
    assert conn.executed[0][0].endswith("FOR UPDATE")
    assert not any(sql.startswith("UPDATE") for sql, _ in conn.executed)
    assert conn.rolled_back and not conn.committed


def test_update_without_time_out_may_touch_a_closed_record():
    out = datetime(2026, 2, 2, 17, 0)
    conn = FakeConnection(rows=[_row(time_out=out), _row(time_out=out, activities="late note")])
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    rec = repo.update("r1", AttendancePatch(activities="late note"))

    assert conn.executed[1][0] == "UPDATE attendance_records SET activities=%s WHERE record_id=%s"
    assert rec.activities == "late note"
