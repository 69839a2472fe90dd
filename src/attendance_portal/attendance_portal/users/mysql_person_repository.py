from __future__ import annotations

from typing import Optional

from ..core.enums import WorkCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Person
from .repository import PersonRepository


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT person_id, email, first_name, last_name, department, category, position, is_active
                FROM people
                WHERE LOWER(email)=%s
                """,
                (email.lower(),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Person(
                person_id=str(row["person_id"]),
                email=row["email"],
                first_name=row["first_name"],
                last_name=row["last_name"],
                department=row.get("department"),
                category=WorkCategory(row["category"]) if row.get("category") else None,
                position=row.get("position"),
                is_active=bool(row.get("is_active", True)),
            )
