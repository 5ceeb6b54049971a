"""Booking status rules."""

import enum

from shareit.core.exceptions import AlreadyApproved, ApprovalFlagRequired


class BookingStatus(str, enum.Enum):
    WAITING = "WAITING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELED = "CANCELED"


def resolve_decision(booking_id: int, current: BookingStatus, approved: bool | None) -> BookingStatus:
    """Target status of an owner's approve/reject decision.

    Only an APPROVED booking is final for the owner; a REJECTED one may be
    reconsidered. CANCELED is never produced here.
    """
    if current == BookingStatus.APPROVED:
        raise AlreadyApproved(booking_id)
    if approved is None:
        raise ApprovalFlagRequired()
    return BookingStatus.APPROVED if approved else BookingStatus.REJECTED
