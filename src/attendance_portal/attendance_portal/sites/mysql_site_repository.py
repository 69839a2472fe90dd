from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Site
from .repository import SiteRepository

_COLUMNS = "site_id, site_name, site_code, location_address, is_active"


def _to_site(r: Dict[str, Any]) -> Site:
    return Site(
        site_id=str(r["site_id"]),
        site_name=r["site_name"],
        site_code=r["site_code"],
        location_address=r.get("location_address"),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLSiteRepository(SiteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sites WHERE is_active=1 ORDER BY site_name ASC")
            return [_to_site(r) for r in fetchall(cur)]

    def get_by_id(self, site_id: str) -> Optional[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sites WHERE site_id=%s AND is_active=1", (site_id,))
            r = fetchone(cur)
            return _to_site(r) if r else None

    def get_by_code(self, site_code: str) -> Optional[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM sites WHERE LOWER(site_code)=%s AND is_active=1",
                (site_code.strip().lower(),),
            )
            r = fetchone(cur)
            return _to_site(r) if r else None
