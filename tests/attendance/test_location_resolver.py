import pytest

from src.attendance_portal.attendance_portal.attendance.factory import LocationResolver
from src.attendance_portal.attendance_portal.attendance.strategies.field_strategy import FieldStrategy
from src.attendance_portal.attendance_portal.attendance.strategies.head_office_strategy import HeadOfficeStrategy
from src.attendance_portal.attendance_portal.core.constants import FIELD_WORK_DEPARTMENT
from src.attendance_portal.attendance_portal.core.enums import WorkCategory
from src.attendance_portal.attendance_portal.core.exceptions import ValidationError
from tests.fakes import CEBU_SITE, CLOSED_SITE, MANILA_SITE, InMemorySites


@pytest.fixture
def resolver():
    return LocationResolver(InMemorySites([CEBU_SITE, MANILA_SITE, CLOSED_SITE]))


def test_factory_picks_strategy_per_category(resolver):
    assert isinstance(resolver.for_category(WorkCategory.HEAD_OFFICE), HeadOfficeStrategy)
    assert isinstance(resolver.for_category(WorkCategory.FIELD), FieldStrategy)


def test_field_site_code_resolves_to_site(resolver):
    loc = resolver.resolve("FIELD", "MTI-CEBU-05")

    assert loc.site_id == CEBU_SITE.site_id
    assert loc.department == FIELD_WORK_DEPARTMENT == "FIELD WORK"


def test_field_site_code_match_is_case_insensitive(resolver):
    loc = resolver.resolve(WorkCategory.FIELD, "mti-cebu-05")

    assert loc.site_id == CEBU_SITE.site_id


def test_field_site_id_resolves_to_site(resolver):
    loc = resolver.resolve("FIELD", MANILA_SITE.site_id)

    assert loc.site_id == MANILA_SITE.site_id
    assert loc.department == FIELD_WORK_DEPARTMENT


def test_field_unknown_token_falls_back_to_department(resolver):
    loc = resolver.resolve("FIELD", "UNKNOWN-SITE-X")

    assert loc.site_id is None
    assert loc.department == "UNKNOWN-SITE-X"


def test_field_inactive_site_is_not_matched(resolver):
    loc = resolver.resolve("FIELD", CLOSED_SITE.site_code)

    assert loc.site_id is None
    assert loc.department == CLOSED_SITE.site_code


def test_field_unregistered_uuid_falls_back_to_department(resolver):
    token = "11111111-2222-4333-8444-555555555555"

    loc = resolver.resolve("FIELD", token)

    assert loc.site_id is None
    assert loc.department == token


def test_head_office_keeps_department_verbatim(resolver):
    loc = resolver.resolve("HEAD_OFFICE", "Logistics")

    assert loc.site_id is None
    assert loc.department == "Logistics"


def test_head_office_does_not_look_up_sites(resolver):
    # A site code typed under HEAD_OFFICE is just a department string.
    loc = resolver.resolve("HEAD_OFFICE", "MTI-CEBU-05")

    assert loc.site_id is None
    assert loc.department == "MTI-CEBU-05"


@pytest.mark.parametrize("category", ["HEAD_OFFICE", "FIELD"])
def test_blank_location_is_rejected(resolver, category):
    with pytest.raises(ValidationError):
        resolver.resolve(category, "   ")


def test_unknown_category_is_rejected(resolver):
    with pytest.raises(ValidationError):
        resolver.resolve("REMOTE", "Logistics")
