from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Iterable, Optional, Tuple

from ..common.datetime_utils import now_local, work_date_of
from ..common.validators import looks_like_email, normalize_email, optional_text, require_text_or_none
from ..core.constants import DEFAULT_BUCKET, DEFAULT_MAX_PHOTO_BYTES
from ..core.enums import AttendanceAction
from ..core.exceptions import (
    AlreadyTimedIn,
    AlreadyTimedOut,
    DuplicateEntry,
    IdentityNotFound,
    NoActiveEntry,
    ValidationError,
)
from ..storage.photo import decode_photo
from ..storage.uploader import EvidenceUploader
from ..users.model import Person
from ..users.repository import PersonRepository
from .factory import LocationResolver
from .model import AttendancePatch, AttendanceRecord, TeamMember, derive_status
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def parse_action(value) -> AttendanceAction:
    if isinstance(value, AttendanceAction):
        return value
    try:
        return AttendanceAction(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("Action must be time_in or time_out")


def normalize_roster(members: Optional[Iterable[Any]]) -> Tuple[TeamMember, ...]:
    """Validate the team roster, keeping the submitted order.

    Entries may be ``TeamMember`` or ``{"name", "role"}`` mappings. Names are
    unique per roster (case-insensitive).
    """

    out: list[TeamMember] = []
    seen: set[str] = set()
    for item in members or ():
        if isinstance(item, TeamMember):
            name, role = item.name, item.role
        elif isinstance(item, dict):
            name, role = item.get("name"), item.get("role")
        else:
            raise ValidationError("Team members must be objects with name and role")

        name = (name or "").strip() if isinstance(name, str) else ""
        role = (role or "").strip() if isinstance(role, str) else ""
        if not name or not role:
            raise ValidationError("Each team member needs a name and a role")
        if name.lower() in seen:
            raise ValidationError(f"Team member {name!r} is listed twice")
        seen.add(name.lower())
        out.append(TeamMember(name=name, role=role))
    return tuple(out)


def evidence_path(action: AttendanceAction, email: str, now: datetime) -> str:
    """Storage path for one evidence photo; unique per action, person and instant."""
    return f"{action.value}/{email}/{now.strftime('%Y%m%dT%H%M%S%f')}.jpg"


class AttendanceService:
    """Daily time-in / time-out state machine.

    ABSENT --time_in--> ACTIVE --time_out--> COMPLETED. Every transition
    carries a freshly uploaded photo; the record is written only after the
    upload succeeded, so a failed request leaves the store untouched.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        people: PersonRepository,
        resolver: LocationResolver,
        uploader: EvidenceUploader,
        *,
        bucket: str = DEFAULT_BUCKET,
        max_photo_bytes: int = DEFAULT_MAX_PHOTO_BYTES,
    ):
        self._attendance = attendance
        self._people = people
        self._resolver = resolver
        self._uploader = uploader
        self._bucket = bucket
        self._max_photo_bytes = int(max_photo_bytes)

    def _find_active_person(self, email: str) -> Optional[Person]:
        if not looks_like_email(email):
            return None
        person = self._people.get_by_email(normalize_email(email))
        return person if person and person.is_active else None

    def _require_person(self, email: str) -> Person:
        require_text_or_none(email, "Email")
        person = self._find_active_person(email)
        if not person:
            raise IdentityNotFound("Employee record not found. Please check your email address.")
        return person

    def get_status(self, email: str, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        """Today's record for ``email``, or None.

        Malformed, unknown or deactivated emails also give None: this feeds UI
        hints only.
        """
        person = self._find_active_person(email)
        if not person:
            return None
        today = work_date_of(now or now_local())
        return self._attendance.find_by_person_and_date(person.person_id, today)

    def get_status_view(self, email: str, *, now: datetime | None = None) -> dict:
        record = self.get_status(email, now=now)
        return {
            "status": derive_status(record).value,
            "record": record.to_dict() if record else None,
        }

    def submit(
        self,
        email: str,
        action,
        location_token: Optional[str],
        category,
        activities: Optional[str] = None,
        photo: Optional[str] = None,
        members: Optional[Iterable[Any]] = None,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        action = parse_action(action)
        person = self._require_person(email)
        location_token = require_text_or_none(location_token, "Location")
        activities = optional_text(activities, "Activities")
        image = decode_photo(photo, max_bytes=self._max_photo_bytes)
        roster = normalize_roster(members)

        now = now or now_local()
        today = work_date_of(now)
        existing = self._attendance.find_by_person_and_date(person.person_id, today)

        if action == AttendanceAction.TIME_IN:
            return self._time_in(
                person,
                existing,
                location_token=location_token,
                category=category,
                activities=activities,
                image=image,
                roster=roster,
                now=now,
            )
        return self._time_out(
            person,
            existing,
            activities=activities,
            image=image,
            roster=roster,
            now=now,
        )

    def _time_in(
        self,
        person: Person,
        existing: Optional[AttendanceRecord],
        *,
        location_token: Optional[str],
        category,
        activities: Optional[str],
        image: bytes,
        roster: Tuple[TeamMember, ...],
        now: datetime,
    ) -> AttendanceRecord:
        if existing:
            raise AlreadyTimedIn("Already timed in today")

        location = self._resolver.resolve(category, location_token or "")
        image_url = self._uploader.upload(image, self._bucket, evidence_path(AttendanceAction.TIME_IN, person.email, now))

        record = AttendanceRecord(
            record_id=str(uuid.uuid4()),
            person_id=person.person_id,
            work_date=work_date_of(now),
            time_in=now,
            time_out=None,
            site_id=location.site_id,
            department=location.department,
            activities=activities,
            image_in_url=image_url,
            members=roster,
        )
        try:
            created = self._attendance.create(record)
        except DuplicateEntry as e:
            logger.info("Concurrent time-in lost for person %s", person.person_id)
            raise AlreadyTimedIn("Already timed in today") from e

        logger.info("Person %s timed in (record %s, site=%s)", person.person_id, created.record_id, created.site_id)
        return created

    def _time_out(
        self,
        person: Person,
        existing: Optional[AttendanceRecord],
        *,
        activities: Optional[str],
        image: bytes,
        roster: Tuple[TeamMember, ...],
        now: datetime,
    ) -> AttendanceRecord:
        if not existing or existing.time_in is None:
            raise NoActiveEntry("No active time-in record found for today.")
        if existing.time_out is not None:
            raise AlreadyTimedOut("You have already timed out for today.")

        image_url = self._uploader.upload(image, self._bucket, evidence_path(AttendanceAction.TIME_OUT, person.email, now))

        patch = AttendancePatch(
            time_out=now,
            image_out_url=image_url,
            activities=activities if activities is not None else existing.activities,
            members=roster,
        )
        updated = self._attendance.update(existing.record_id, patch)

        logger.info("Person %s timed out (record %s)", person.person_id, updated.record_id)
        return updated
