import pytest

from app.core.exceptions import InvalidTransition
from app.core.workflow import (
    BLOG_POST_TRANSITIONS,
    PAYMENT_TRANSITIONS,
    TESTIMONY_TRANSITIONS,
    can_transition,
    check_transition,
)
from app.models import common


STATUS = common.TestimonyStatus


@pytest.mark.parametrize(
    "current, target",
    [
        (STATUS.PENDING, STATUS.APPROVED),
        (STATUS.PENDING, STATUS.REJECTED),
        (STATUS.PENDING, STATUS.ARCHIVED),
        (STATUS.APPROVED, STATUS.SCHEDULED),
        (STATUS.APPROVED, STATUS.ARCHIVED),
        (STATUS.SCHEDULED, STATUS.ARCHIVED),
        (STATUS.REJECTED, STATUS.ARCHIVED),
    ],
)
def test_allowed_moderation_moves(current, target):
    assert can_transition(TESTIMONY_TRANSITIONS, current, target)


@pytest.mark.parametrize(
    "current, target",
    [
        (STATUS.PENDING, STATUS.SCHEDULED),
        (STATUS.REJECTED, STATUS.APPROVED),
        (STATUS.ARCHIVED, STATUS.PENDING),
        (STATUS.SCHEDULED, STATUS.APPROVED),
    ],
)
def test_refused_moderation_moves(current, target):
    assert not can_transition(TESTIMONY_TRANSITIONS, current, target)


def test_same_status_is_accepted():
    for status in STATUS:
        assert can_transition(TESTIMONY_TRANSITIONS, status, status)


def test_every_status_has_a_row():
    assert set(TESTIMONY_TRANSITIONS) == set(common.TestimonyStatus)
    assert set(BLOG_POST_TRANSITIONS) == set(common.BlogPostStatus)
    assert set(PAYMENT_TRANSITIONS) == set(common.PaymentStatus)


def test_refunded_and_cancelled_payments_are_final():
    for target in common.PaymentStatus:
        if target in (common.PaymentStatus.REFUNDED, common.PaymentStatus.CANCELLED):
            continue
        assert not can_transition(PAYMENT_TRANSITIONS, common.PaymentStatus.REFUNDED, target)
        assert not can_transition(PAYMENT_TRANSITIONS, common.PaymentStatus.CANCELLED, target)


def test_blog_posts_can_be_republished():
    assert can_transition(BLOG_POST_TRANSITIONS, common.BlogPostStatus.ARCHIVED, common.BlogPostStatus.PUBLISHED)


def test_check_transition_reports_status_field():
    with pytest.raises(InvalidTransition) as exc_info:
        check_transition(TESTIMONY_TRANSITIONS, STATUS.ARCHIVED, STATUS.APPROVED, "testimony")
    assert exc_info.value.status_code == 400
    assert exc_info.value.errors[0]["field"] == "status"
    assert "archived" in exc_info.value.message
