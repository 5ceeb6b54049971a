from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.models.comment import Comment


class CommentRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def for_item(self, item_id: int) -> list[Comment]:
        """Comments on an item, oldest first."""
        result = await self.db.execute(
            select(Comment)
            .where(Comment.item_id == item_id)
            .order_by(Comment.created, Comment.id)
        )
        return list(result.scalars().unique().all())

    async def save(self, comment: Comment) -> Comment:
        self.db.add(comment)
        await self.db.flush()
        return comment
