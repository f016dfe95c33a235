"""상품 레포지토리.

Item Repository — Paged item listing on top of the generic CRUD base.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.item import Item
from app.repositories.base import BaseRepository


class ItemRepository(BaseRepository[Item]):
    """상품 레포지토리 (Item repository)."""

    def __init__(self) -> None:
        super().__init__(Item)

    async def get_page(
        self,
        db: AsyncSession,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[Item], int]:
        """상품 목록을 ID 순으로 페이지 조회합니다 (Items by id, paginated)."""
        query: Select = select(Item).order_by(Item.id)
        return await self.get_paginated(db, query, page, per_page)


# 싱글턴 인스턴스 — Singleton instance
item_repository: ItemRepository = ItemRepository()
