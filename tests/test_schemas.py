import pytest
from pydantic import ValidationError

from app.core.exceptions import ValidationFailed
from app.models.common import ResourceCategory
from app.schemas.blog_post import BlogPostCreate
from app.schemas.common import Pagination, enum_filter, form_fields, format_validation_errors, parse_tags
from app.schemas.member import MemberCreate
from app.schemas.resource import ResourceCreate
from app.schemas import testimony as testimony_schemas
from app.services.blog import compute_reading_time


def test_parse_tags_from_comma_string():
    assert parse_tags(" faith, hope ,, love ") == ["faith", "hope", "love"]


def test_parse_tags_from_list():
    assert parse_tags(["grace ", "", " peace"]) == ["grace", "peace"]


def test_parse_tags_none_is_empty():
    assert parse_tags(None) == []


def test_pagination_rounds_pages_up():
    assert Pagination.build(page=2, limit=10, total=21).model_dump() == {"current": 2, "pages": 3, "total": 21}


def test_reading_time_rounds_up():
    assert compute_reading_time("word " * 200) == 1
    assert compute_reading_time("word " * 201) == 2
    assert compute_reading_time("") == 0


def test_validation_errors_keep_order_and_strip_location():
    errors = [
        {"loc": ("body", "title"), "msg": "Field required"},
        {"loc": ("query", "page"), "msg": "Input should be greater than or equal to 1"},
        {"loc": (), "msg": "Value error, end_date must not be before start_date"},
    ]
    assert format_validation_errors(errors) == [
        {"field": "title", "message": "Field required"},
        {"field": "page", "message": "Input should be greater than or equal to 1"},
        {"field": "__root__", "message": "end_date must not be before start_date"},
    ]


def test_form_fields_drop_blank_values():
    assert form_fields([("title", "Retreat"), ("location", "  ")]) == {"title": "Retreat", "location": None}


def test_enum_filter_all_means_no_filter():
    assert enum_filter(ResourceCategory, "all", "category") is None
    assert enum_filter(ResourceCategory, "faq", "category") == ResourceCategory.FAQ
    with pytest.raises(ValidationFailed):
        enum_filter(ResourceCategory, "poster", "category")


def test_blog_slug_pattern():
    with pytest.raises(ValidationError) as exc_info:
        BlogPostCreate(title="Hello", slug="Not A Slug", content="x" * 120)
    assert exc_info.value.errors()[0]["loc"] == ("slug",)


def test_member_email_lower_cased_and_phone_checked():
    member = MemberCreate(email="John.Doe@Church.org", full_name="John Doe", phone="+237 650-123-456")
    assert member.email == "john.doe@church.org"
    with pytest.raises(ValidationError):
        MemberCreate(email="john@church.org", full_name="John Doe", phone="call me")


def test_resource_duration_pattern():
    assert ResourceCreate(
        title="Hymn", description="Sunday hymn", category="song", file_type="audio", duration="1:04:30"
    ).duration == "1:04:30"
    with pytest.raises(ValidationError):
        ResourceCreate(title="Hymn", description="Sunday hymn", category="song", file_type="audio", duration="90 min")


def test_scheduled_status_requires_date():
    with pytest.raises(ValidationError) as exc_info:
        testimony_schemas.TestimonyStatusUpdate(status="scheduled")
    assert exc_info.value.errors()[0]["loc"] == ("scheduled_date",)

    update = testimony_schemas.TestimonyStatusUpdate(status="approved")
    assert update.scheduled_date is None
