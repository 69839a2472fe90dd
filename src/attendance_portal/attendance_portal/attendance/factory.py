from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import WorkCategory
from ..core.exceptions import ValidationError
from ..sites.repository import SiteRepository
from .strategies.base import LocationStrategy, ResolvedLocation
from .strategies.field_strategy import FieldStrategy
from .strategies.head_office_strategy import HeadOfficeStrategy


def parse_category(value) -> WorkCategory:
    if isinstance(value, WorkCategory):
        return value
    try:
        return WorkCategory(str(value or "").strip().upper())
    except ValueError:
        raise ValidationError("Work category must be HEAD_OFFICE or FIELD")


@dataclass
class LocationResolver:
    """Factory Pattern: choose the location strategy for a work category."""

    sites: SiteRepository

    def for_category(self, category: WorkCategory) -> LocationStrategy:
        if category == WorkCategory.HEAD_OFFICE:
            return HeadOfficeStrategy()
        return FieldStrategy(self.sites)

    def resolve(self, category, location_token: str) -> ResolvedLocation:
        return self.for_category(parse_category(category)).resolve(location_token)
