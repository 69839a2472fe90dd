from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import LocationResolver
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_BUCKET, DEFAULT_MAX_PHOTO_BYTES, DEFAULT_UPLOAD_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .sites.mysql_site_repository import MySQLSiteRepository
from .sites.repository import SiteRepository
from .sites.service import SiteService
from .storage.uploader import EvidenceUploader, SupabaseStorageUploader
from .users.mysql_person_repository import MySQLPersonRepository
from .users.repository import PersonRepository


@dataclass(frozen=True)
class Container:
    people_repo: PersonRepository
    sites_repo: SiteRepository
    attendance_repo: AttendanceRepository
    uploader: EvidenceUploader

    site_service: SiteService
    attendance_service: AttendanceService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    people_repo: PersonRepository,
    sites_repo: SiteRepository,
    attendance_repo: AttendanceRepository,
    uploader: EvidenceUploader,
    bucket: str = DEFAULT_BUCKET,
    max_photo_bytes: int = DEFAULT_MAX_PHOTO_BYTES,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services on top of the given repositories/uploader."""
    attendance_service = AttendanceService(
        attendance_repo,
        people_repo,
        LocationResolver(sites_repo),
        uploader,
        bucket=bucket,
        max_photo_bytes=max_photo_bytes,
    )
    return Container(
        people_repo=people_repo,
        sites_repo=sites_repo,
        attendance_repo=attendance_repo,
        uploader=uploader,
        site_service=SiteService(sites_repo),
        attendance_service=attendance_service,
        conn=conn,
    )


def build_container(*, db_config: dict, storage_config: dict, max_photo_bytes: int = DEFAULT_MAX_PHOTO_BYTES) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    uploader = SupabaseStorageUploader(
        base_url=str(storage_config["url"]),
        api_key=str(storage_config["key"]),
        timeout=float(storage_config.get("timeout", DEFAULT_UPLOAD_TIMEOUT_SECONDS)),
    )

    return wire(
        people_repo=MySQLPersonRepository(conn),
        sites_repo=MySQLSiteRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        uploader=uploader,
        bucket=str(storage_config.get("bucket", DEFAULT_BUCKET)),
        max_photo_bytes=int(max_photo_bytes),
        conn=conn,
    )
