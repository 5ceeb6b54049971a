from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.models.item import Item
from shareit.repositories.pagination import Page


class ItemRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, item_id: int) -> Optional[Item]:
        return await self.db.get(Item, item_id)

    async def by_owner(self, owner_id: int, page: Page) -> list[Item]:
        result = await self.db.execute(
            select(Item)
            .where(Item.owner_id == owner_id)
            .order_by(Item.id)
            .offset(page.start)
            .limit(page.size)
        )
        return list(result.scalars().unique().all())

    async def search(self, text: str, page: Page) -> list[Item]:
        """Available items whose name or description contains `text`, ignoring case."""
        needle = text.lower()
        result = await self.db.execute(
            select(Item)
            .where(
                Item.available.is_(True),
                or_(
                    func.lower(Item.name).contains(needle, autoescape=True),
                    func.lower(Item.description).contains(needle, autoescape=True),
                ),
            )
            .order_by(Item.id)
            .offset(page.start)
            .limit(page.size)
        )
        return list(result.scalars().unique().all())

    async def save(self, item: Item) -> Item:
        self.db.add(item)
        await self.db.flush()
        return item

    async def delete(self, item: Item) -> None:
        await self.db.delete(item)
        await self.db.flush()
