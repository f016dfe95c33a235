"""기본 CRUD 레포지토리 테스트.

Base repository tests — generic create, read, update, delete, exists.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Item
from app.repositories.item_repository import item_repository
from app.repositories.member_repository import member_repository


class TestBaseRepository:
    """제네릭 CRUD 테스트."""

    async def test_create_and_get(self, db: AsyncSession):
        item = await item_repository.create(db, {"name": "JPA", "price": 1000, "stock_quantity": 3})
        assert item.id is not None
        assert await item_repository.get_by_id(db, item.id) is item

    async def test_get_unknown_is_none(self, db: AsyncSession):
        assert await item_repository.get_by_id(db, 9999) is None

    async def test_get_all_with_filter(self, db: AsyncSession, seeded):
        items = await item_repository.get_all(db, filters={"price": 20000})
        assert [i.name for i in items] == ["JPA2 BOOK", "SPRING1 BOOK"]

    async def test_update_unknown_is_none(self, db: AsyncSession):
        assert await item_repository.update(db, 9999, {"price": 1}) is None

    async def test_delete_and_exists(self, db: AsyncSession):
        item = await item_repository.save(db, Item(name="TMP", price=1, stock_quantity=1))
        assert await item_repository.exists(db, {"name": "TMP"})

        assert await item_repository.delete(db, item.id) is True
        assert not await item_repository.exists(db, {"name": "TMP"})
        assert await item_repository.delete(db, item.id) is False

    async def test_member_get_by_name(self, db: AsyncSession, seeded):
        assert [m.name for m in await member_repository.get_by_name(db, "userA")] == ["userA"]
        assert await member_repository.get_by_name(db, "user") == []
