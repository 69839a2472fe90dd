import base64

import pytest

from src.attendance_portal.attendance_portal.core.exceptions import EvidenceRequired, PayloadTooLarge, ValidationError
from src.attendance_portal.attendance_portal.storage.photo import decode_photo
from tests.fakes import jpeg_base64

TEN_MIB = 10 * 1024 * 1024


def test_decodes_data_url_to_jpeg_bytes():
    raw = decode_photo(jpeg_base64(data_url=True), max_bytes=TEN_MIB)

    assert raw[:2] == b"\xff\xd8"


def test_decodes_bare_base64():
    assert decode_photo(jpeg_base64(data_url=False), max_bytes=TEN_MIB)[:2] == b"\xff\xd8"


@pytest.mark.parametrize("photo", [None, "", "  \n"])
def test_missing_photo_requires_evidence(photo):
    with pytest.raises(EvidenceRequired):
        decode_photo(photo, max_bytes=TEN_MIB)


def test_oversized_photo_is_rejected():
    photo = jpeg_base64(size=(32, 32))

    with pytest.raises(PayloadTooLarge):
        decode_photo(photo, max_bytes=100)


def test_invalid_base64_is_rejected():
    with pytest.raises(ValidationError):
        decode_photo("data:image/jpeg;base64,@@not-base64@@", max_bytes=TEN_MIB)


def test_non_image_payload_is_rejected():
    not_an_image = base64.b64encode(b"just some text, not a picture").decode("ascii")

    with pytest.raises(ValidationError):
        decode_photo(not_an_image, max_bytes=TEN_MIB)


@pytest.mark.parametrize("photo", [123, {"data": "x"}, ["x"]])
def test_non_string_photo_is_rejected(photo):
    with pytest.raises(ValidationError):
        decode_photo(photo, max_bytes=TEN_MIB)
