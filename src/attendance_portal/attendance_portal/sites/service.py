from __future__ import annotations

import logging

from ..core.constants import HEAD_OFFICE_DEPARTMENTS, JOB_ROLES
from ..core.enums import WorkCategory
from .repository import SiteRepository

logger = logging.getLogger(__name__)


class SiteService:
    """Use case: list what the attendance form can offer."""

    def __init__(self, sites: SiteRepository):
        self._sites = sites

    def list_sites(self) -> list[dict]:
        sites = self._sites.list_active()
        logger.debug("Loaded %d active sites", len(sites))
        return [{"id": s.site_id, "name": s.site_name, "code": s.site_code} for s in sites]

    @staticmethod
    def form_options() -> dict:
        return {
            "categories": [c.value for c in WorkCategory],
            "departments": list(HEAD_OFFICE_DEPARTMENTS),
            "job_roles": list(JOB_ROLES),
        }
