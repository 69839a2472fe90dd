from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Site


class SiteRepository(Protocol):
    def list_active(self) -> Sequence[Site]:
        """Active sites ordered by name."""

        raise NotImplementedError

    def get_by_id(self, site_id: str) -> Optional[Site]:
        """Active site with this surrogate id, if any."""

        raise NotImplementedError

    def get_by_code(self, site_code: str) -> Optional[Site]:
        """Active site whose code matches case-insensitively, if any."""

        raise NotImplementedError
