from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import Timeout
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_TIMEOUT_ERRNOS = {errorcode.CR_SERVER_LOST, errorcode.ER_LOCK_WAIT_TIMEOUT}


def is_timeout_error(err: mysql.connector.Error) -> bool:
    return err.errno in _TIMEOUT_ERRNOS or "timed out" in str(err).lower()


def is_duplicate_key(err: mysql.connector.Error) -> bool:
    return err.errno == errorcode.ER_DUP_ENTRY


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Open a short-lived connection + cursor; commit on success, rollback on error.

    Driver timeouts are re-raised as ``Timeout`` so callers see one error kind
    regardless of where the connection stalled.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        if is_timeout_error(e):
            logger.warning("Database connect timed out: %s", e)
            raise Timeout("The database did not respond in time") from e
        raise

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        if is_timeout_error(e):
            logger.warning("Database query timed out: %s", e)
            raise Timeout("The database did not respond in time") from e
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def load_json_list(value: Any) -> List[Any]:
    """Normalize a MySQL JSON column into a Python list.

    mysql-connector can return JSON as:
    - str (most versions)
    - bytes / bytearray
    - already-decoded list
    """

    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value) if value.strip() else []
    if not isinstance(value, list):
        raise TypeError(f"Expected JSON array, got {type(value)!r}")
    return value
