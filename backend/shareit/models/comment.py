"""
Comment model: feedback left on an item by someone who has used it.

Key design decisions:
- Only a booker with a finished APPROVED booking of the item may comment;
  the rule lives in the item service, not in the table
- `created` is the naive UTC instant the comment was accepted
- `author` is eagerly joined so responses can carry the author's name
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from shareit.db.base import Base, TimestampMixin


class Comment(Base, TimestampMixin):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(String(1000), nullable=False)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created = Column(DateTime, nullable=False)

    author = relationship("User", lazy="joined", innerjoin=True)

    @property
    def author_name(self) -> str:
        return self.author.name

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, item={self.item_id}, author={self.author_id})>"
