"""
Temporal classification of bookings.

A booking's time frame relative to an instant `now` is exactly one of:

  CURRENT   start <= now <= end
  PAST      end < now
  FUTURE    start > now

WAITING and REJECTED are status filters and ignore time; ALL matches
everything. `now` is always passed in, never read from a clock here.
"""

import enum
from datetime import datetime

from shareit.core.exceptions import UnsupportedStatus
from shareit.domain.booking_state import BookingStatus


class Category(str, enum.Enum):
    ALL = "ALL"
    CURRENT = "CURRENT"
    PAST = "PAST"
    FUTURE = "FUTURE"
    WAITING = "WAITING"
    REJECTED = "REJECTED"


STATUS_FILTERS = {
    Category.WAITING: BookingStatus.WAITING,
    Category.REJECTED: BookingStatus.REJECTED,
}


def parse_category(literal: str | None) -> Category:
    if literal is None:
        raise UnsupportedStatus(literal)
    try:
        return Category(literal.strip())
    except ValueError:
        raise UnsupportedStatus(literal) from None


def classify(booking, now: datetime) -> Category:
    if booking.end < now:
        return Category.PAST
    if booking.start > now:
        return Category.FUTURE
    return Category.CURRENT


def matches(booking, category: Category, now: datetime) -> bool:
    if category is Category.ALL:
        return True
    if category in STATUS_FILTERS:
        return booking.status == STATUS_FILTERS[category]
    return classify(booking, now) is category
