"""
Item model: something an owner lists for others to book.

Key design decisions:
- `available` is the owner's switch; unavailable items reject new bookings
- `owner` is eagerly joined because every booking rule needs the owner id
- `request_id` references an item request by id only (requests live elsewhere)
"""

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from shareit.db.base import Base, TimestampMixin


class Item(Base, TimestampMixin):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=False)
    available = Column(Boolean, nullable=False, default=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    request_id = Column(Integer, nullable=True)

    owner = relationship("User", lazy="joined", innerjoin=True)

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, name={self.name}, owner={self.owner_id}, available={self.available})>"
