from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ResolvedLocation:
    site_id: Optional[str] = None
    department: Optional[str] = None


class LocationStrategy(ABC):
    """Strategy Pattern: encapsulate how a location token is classified for one work category."""

    @abstractmethod
    def resolve(self, location_token: str) -> ResolvedLocation:
        raise NotImplementedError
