from __future__ import annotations

from ...common.validators import require_non_empty
from .base import LocationStrategy, ResolvedLocation


class HeadOfficeStrategy(LocationStrategy):
    """Head office work: the token is the department name, taken verbatim."""

    def resolve(self, location_token: str) -> ResolvedLocation:
        return ResolvedLocation(site_id=None, department=require_non_empty(location_token, "Department"))
