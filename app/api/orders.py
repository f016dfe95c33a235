"""주문 라우터 — 주문 생성/취소/상세 및 로딩 전략별 목록 조회.

Order Router — Place, cancel, and read orders, and list order aggregates
under a selectable loading policy.

목록 응답에는 사용한 전략과 실행 SQL 수가 함께 담깁니다 (The list
response carries the policy used and the number of statements executed).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.order import OrderStatus
from app.schemas.order import (
    FetchPolicy,
    OrderAggregateListResponse,
    OrderCreate,
    OrderFlatDto,
    OrderResponse,
    OrderSearch,
)
from app.services.order_query_service import order_query_service
from app.services.order_service import order_service

router: APIRouter = APIRouter()


@router.get("", response_model=OrderAggregateListResponse)
async def list_orders(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    status: OrderStatus | None = None,
    member_name: str | None = None,
    policy: FetchPolicy = FetchPolicy.DTO_BATCH,
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=0),
) -> OrderAggregateListResponse:
    """주문 애그리거트 목록을 조회합니다.

    List order aggregates (member, delivery, lines) matching the status
    and member-name filters, loaded with the given policy.
    """
    result: OrderAggregateListResponse = await order_query_service.load_orders(
        db,
        OrderSearch(status=status, member_name=member_name),
        policy=policy,
        offset=offset,
        limit=limit,
    )
    # 요청 로그에 SQL 수 기록 — Picked up by the request logging middleware
    request.state.sql_statements = result.statement_count
    return result


@router.get("/flat", response_model=list[OrderFlatDto])
async def list_flat_orders(
    db: Annotated[AsyncSession, Depends(get_db)],
    status: OrderStatus | None = None,
    member_name: str | None = None,
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=0),
) -> list[OrderFlatDto]:
    """전체 조인 평면 행을 그대로 조회합니다.

    Raw rows of the five-table join, one per order line, not regrouped.
    offset/limit count orders; limit never exceeds the search cap.
    """
    return await order_query_service.find_flat_orders(
        db, OrderSearch(status=status, member_name=member_name), offset, limit
    )


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    data: OrderCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse:
    """주문을 생성합니다. 재고가 부족하면 400.

    Place an order. Unknown member or item yields 404, short stock 400.
    """
    result: OrderResponse = await order_service.order(db, data)
    await db.commit()
    return result


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse:
    return await order_service.get_order(db, order_id)


@router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse:
    """주문을 취소합니다 (재고 복구).

    Cancel an order and restore stock. A completed delivery or an order
    already cancelled yields 400.
    """
    result: OrderResponse = await order_service.cancel_order(db, order_id)
    await db.commit()
    return result
