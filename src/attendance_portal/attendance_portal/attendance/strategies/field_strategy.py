from __future__ import annotations

import logging
from typing import Optional

from ...common.validators import is_uuid, require_non_empty
from ...core.constants import FIELD_WORK_DEPARTMENT
from ...sites.model import Site
from ...sites.repository import SiteRepository
from .base import LocationStrategy, ResolvedLocation

logger = logging.getLogger(__name__)


class FieldStrategy(LocationStrategy):
    """Field work: match a registered site by id or code, else keep the token as an ad-hoc label.

    Unmatched tokens are not an error; technicians at sites that are not
    registered yet must still be able to log attendance.
    """

    def __init__(self, sites: SiteRepository):
        self._sites = sites

    def _find_site(self, token: str) -> Optional[Site]:
        site = self._sites.get_by_id(token) if is_uuid(token) else None
        return site or self._sites.get_by_code(token)

    def resolve(self, location_token: str) -> ResolvedLocation:
        token = require_non_empty(location_token, "Project site")
        site = self._find_site(token)
        if site:
            return ResolvedLocation(site_id=site.site_id, department=FIELD_WORK_DEPARTMENT)

        logger.info("Field location %r matches no registered site; storing it as department", token)
        return ResolvedLocation(site_id=None, department=token)
