"""Status transition tables for the entities that carry a lifecycle.

Each table maps a current status to the set of statuses it may move to.
Staying in the same status is always accepted so that other fields can be
updated alongside an unchanged status.
"""
from typing import FrozenSet, Mapping, TypeVar

from app.core.exceptions import InvalidTransition
from app.models.common import BlogPostStatus, PaymentStatus, TestimonyStatus

S = TypeVar("S")


TESTIMONY_TRANSITIONS: Mapping[TestimonyStatus, FrozenSet[TestimonyStatus]] = {
    TestimonyStatus.PENDING: frozenset({
        TestimonyStatus.APPROVED,
        TestimonyStatus.REJECTED,
        TestimonyStatus.ARCHIVED,
    }),
    TestimonyStatus.APPROVED: frozenset({
        TestimonyStatus.SCHEDULED,
        TestimonyStatus.ARCHIVED,
    }),
    TestimonyStatus.SCHEDULED: frozenset({TestimonyStatus.ARCHIVED}),
    TestimonyStatus.REJECTED: frozenset({TestimonyStatus.ARCHIVED}),
    TestimonyStatus.ARCHIVED: frozenset(),
}

BLOG_POST_TRANSITIONS: Mapping[BlogPostStatus, FrozenSet[BlogPostStatus]] = {
    BlogPostStatus.DRAFT: frozenset({BlogPostStatus.PUBLISHED, BlogPostStatus.ARCHIVED}),
    BlogPostStatus.PUBLISHED: frozenset({BlogPostStatus.DRAFT, BlogPostStatus.ARCHIVED}),
    BlogPostStatus.ARCHIVED: frozenset({BlogPostStatus.DRAFT, BlogPostStatus.PUBLISHED}),
}

PAYMENT_TRANSITIONS: Mapping[PaymentStatus, FrozenSet[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({
        PaymentStatus.COMPLETED,
        PaymentStatus.FAILED,
        PaymentStatus.CANCELLED,
    }),
    PaymentStatus.FAILED: frozenset({PaymentStatus.PENDING, PaymentStatus.CANCELLED}),
    PaymentStatus.COMPLETED: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.REFUNDED: frozenset(),
    PaymentStatus.CANCELLED: frozenset(),
}


def can_transition(table: Mapping[S, FrozenSet[S]], current: S, target: S) -> bool:
    return current == target or target in table.get(current, frozenset())


def check_transition(table: Mapping[S, FrozenSet[S]], current: S, target: S, label: str) -> None:
    if not can_transition(table, current, target):
        raise InvalidTransition(
            f"Cannot change {label} status from '{_value(current)}' to '{_value(target)}'",
            errors=[{"field": "status", "message": f"Transition {_value(current)} -> {_value(target)} is not allowed"}],
        )


def _value(status) -> str:
    return getattr(status, "value", str(status))
