from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import WorkCategory


@dataclass(frozen=True)
class Person:
    """Domain entity: an employee, identified by email.

    Created and maintained outside this system; read-only here.
    """

    person_id: str
    email: str
    first_name: str
    last_name: str
    department: Optional[str]
    category: Optional[WorkCategory]
    position: Optional[str] = None
    is_active: bool = True
