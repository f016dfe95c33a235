"""상품 서비스 — 상품 등록, 수정, 조회.

Item Service — Registration, update, and listing of items.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.item import Item
from app.repositories.item_repository import item_repository
from app.schemas.common import PaginatedResponse
from app.schemas.item import ItemCreate, ItemResponse, ItemUpdate
from app.utils.exceptions import NotFoundError


class ItemService:
    """상품 관련 비즈니스 로직을 처리하는 서비스 (Item business logic)."""

    def _to_response(self, item: Item) -> ItemResponse:
        return ItemResponse(
            id=item.id,
            name=item.name,
            price=item.price,
            stock_quantity=item.stock_quantity,
        )

    async def save_item(self, db: AsyncSession, data: ItemCreate) -> ItemResponse:
        """상품을 등록합니다 (Register an item)."""
        item: Item = await item_repository.create(db, data.model_dump())
        return self._to_response(item)

    async def update_item(self, db: AsyncSession, item_id: int, data: ItemUpdate) -> ItemResponse:
        """상품 정보를 부분 수정합니다.

        Partially update an item; only fields present in the request change.

        Raises:
            NotFoundError: 상품 없음 (Item not found)
        """
        item: Item | None = await item_repository.update(
            db, item_id, data.model_dump(exclude_unset=True)
        )
        if item is None:
            raise NotFoundError("Item not found")
        return self._to_response(item)

    async def find_one(self, db: AsyncSession, item_id: int) -> ItemResponse:
        item: Item | None = await item_repository.get_by_id(db, item_id)
        if item is None:
            raise NotFoundError("Item not found")
        return self._to_response(item)

    async def find_items(
        self,
        db: AsyncSession,
        page: int = 1,
        per_page: int = 20,
    ) -> PaginatedResponse:
        """상품 목록을 페이지 조회합니다 (Paginated item list)."""
        items, total = await item_repository.get_page(db, page, per_page)
        return PaginatedResponse(
            items=[self._to_response(i) for i in items],
            total=total,
            page=page,
            per_page=per_page,
        )


# 싱글턴 인스턴스 — Singleton instance
item_service: ItemService = ItemService()
