from __future__ import annotations

import re
from typing import Any, Optional

from ..core.exceptions import ValidationError

UUID_PATTERN = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")


def require_text_or_none(value: Any, field_name: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value


def require_non_empty(value: Optional[str], field_name: str) -> str:
    value = require_text_or_none(value, field_name)
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Optional[str], field_name: str = "Value") -> Optional[str]:
    v = (require_text_or_none(value, field_name) or "").strip()
    return v or None


def looks_like_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    v = value.strip()
    return "@" in v and len(v) > 3


def normalize_email(value: Optional[str]) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def is_uuid(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(UUID_PATTERN.match(value))
