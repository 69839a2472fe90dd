from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Site:
    """Domain entity: a registered field location."""

    site_id: str
    site_name: str
    site_code: str
    location_address: Optional[str] = None
    is_active: bool = True
