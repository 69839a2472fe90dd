from __future__ import annotations

import base64
import binascii
import io
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..core.exceptions import EvidenceRequired, PayloadTooLarge, ValidationError


def _strip_data_url(data: str) -> str:
    # "data:image/jpeg;base64,/9j/..." -> "/9j/..."
    head, sep, tail = data.partition(",")
    if sep and head.startswith("data:"):
        return tail
    return data


def decode_photo(photo: Optional[str], *, max_bytes: int) -> bytes:
    """Decode a base64 (or data URL) photo into raw image bytes.

    Raises ``EvidenceRequired`` when no photo was sent, ``PayloadTooLarge``
    when it exceeds ``max_bytes`` and ``ValidationError`` when it is not a
    readable image.
    """

    if photo is not None and not isinstance(photo, str):
        raise ValidationError("Photo must be a base64 string")
    if not photo or not photo.strip():
        raise EvidenceRequired("Photo verification is required")

    encoded = "".join(_strip_data_url(photo.strip()).split())

    # Reject before decoding: every 4 base64 chars carry 3 bytes.
    if len(encoded) > ((max_bytes + 2) // 3) * 4:
        raise PayloadTooLarge(f"Photo exceeds the {max_bytes / (1024 * 1024):g} MiB limit")

    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Photo is not valid base64 data")

    if len(raw) > max_bytes:
        raise PayloadTooLarge(f"Photo exceeds the {max_bytes / (1024 * 1024):g} MiB limit")

    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError("Photo is not a readable image")

    return raw
