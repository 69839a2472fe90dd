"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Department label stored on FIELD records that matched a registered site.
FIELD_WORK_DEPARTMENT = "FIELD WORK"

DEFAULT_BUCKET = "attendance"
DEFAULT_MAX_PHOTO_BYTES = 10 * 1024 * 1024
DEFAULT_UPLOAD_TIMEOUT_SECONDS = 10
DEFAULT_DB_CONNECT_TIMEOUT_SECONDS = 10

HEAD_OFFICE_DEPARTMENTS = (
    "Finance and admin",
    "Human Resource",
    "Logistics",
    "Operations",
    "Sales and SAQ",
    "Telecom Enterprise",
)

JOB_ROLES = ("Rigger", "Installer", "Driver")
