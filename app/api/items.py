"""상품 라우터 — 상품 등록, 목록, 수정.

Item Router — Register, list, and update items.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import PaginatedResponse
from app.schemas.item import ItemCreate, ItemResponse, ItemUpdate
from app.services.item_service import item_service

router: APIRouter = APIRouter()


@router.post("", response_model=ItemResponse, status_code=201)
async def create_item(
    data: ItemCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ItemResponse:
    """상품을 등록합니다 (Register an item)."""
    result: ItemResponse = await item_service.save_item(db, data)
    await db.commit()
    return result


@router.get("", response_model=PaginatedResponse)
async def list_items(
    db: Annotated[AsyncSession, Depends(get_db)],
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
) -> PaginatedResponse:
    """상품 목록을 페이지 조회합니다.

    List items, one page at a time, in id order.
    """
    return await item_service.find_items(db, page, per_page)


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    item_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ItemResponse:
    return await item_service.find_one(db, item_id)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: int,
    data: ItemUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ItemResponse:
    """상품 정보를 수정합니다. 보낸 필드만 변경됩니다.

    Update an item; only the fields present in the body change.
    """
    result: ItemResponse = await item_service.update_item(db, item_id, data)
    await db.commit()
    return result
