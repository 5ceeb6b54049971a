"""
Booking model: a request by a booker to use an item during [start, end].

Key design decisions:
- `start`/`end` are naive UTC; both bounds are inclusive for CURRENT lookups
- CHECK constraint keeps end strictly after start at the DB level
- Composite indexes on (booker_id, start_date) and (item_id, start_date)
  match the "newest first" listings
- Status is stored by name; CANCELED is only set through the update path
"""

from sqlalchemy import Column, Integer, DateTime, Enum, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from shareit.db.base import Base, TimestampMixin
from shareit.domain.booking_state import BookingStatus


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    start = Column("start_date", DateTime, nullable=False)
    end = Column("end_date", DateTime, nullable=False)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
    booker_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        Enum(BookingStatus, native_enum=False, length=20),
        nullable=False,
        default=BookingStatus.WAITING,
    )

    # Relationships
    item = relationship("Item", lazy="joined", innerjoin=True)
    booker = relationship("User", lazy="joined", innerjoin=True)

    __table_args__ = (
        CheckConstraint("end_date > start_date", name="check_booking_interval"),
        CheckConstraint(
            "status IN ('WAITING', 'APPROVED', 'REJECTED', 'CANCELED')",
            name="check_booking_status",
        ),
        Index("ix_bookings_booker_start", "booker_id", "start_date"),
        Index("ix_bookings_item_start", "item_id", "start_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, item={self.item_id}, booker={self.booker_id}, "
            f"status={self.status})>"
        )
