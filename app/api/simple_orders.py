"""주문 요약 라우터 — to-one 관계(회원, 배송)만 포함한 주문 목록.

Simple Order Router — Order summaries with member and delivery only.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.order import OrderSimpleQueryDto
from app.services.order_query_service import SimpleOrderMode, order_query_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[OrderSimpleQueryDto])
async def list_simple_orders(
    db: Annotated[AsyncSession, Depends(get_db)],
    mode: SimpleOrderMode = SimpleOrderMode.DTO,
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=0),
) -> list[OrderSimpleQueryDto]:
    """주문 요약 목록을 조회합니다.

    entity: 페치 조인 엔티티를 DTO로 변환 (fetch-joined entities, converted)
    dto:    DTO로 직접 조회 (projected directly)
    """
    return await order_query_service.find_simple_orders(db, mode, offset, limit)
