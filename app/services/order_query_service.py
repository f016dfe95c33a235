"""주문 조회 서비스 — 목록 화면용 주문 조회.

Order Query Service — Read-side order listings for the API: full
aggregates through the loader, to-one summaries, and raw flat rows.
"""

import enum

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.order import Order
from app.repositories.order_query_repository import order_query_repository
from app.repositories.order_repository import address_of, order_repository
from app.schemas.common import AddressSchema
from app.schemas.order import (
    FetchPolicy,
    OrderAggregateListResponse,
    OrderFlatDto,
    OrderSearch,
    OrderSimpleQueryDto,
)
from app.services.order_loader import LoadResult, order_aggregate_loader
from app.utils.exceptions import BadRequestError


class SimpleOrderMode(str, enum.Enum):
    """주문 요약 조회 방식.

    entity: 엔티티를 페치 조인으로 조회 후 DTO 변환 (Fetch-joined entities, converted)
    dto:    DTO로 직접 조회 (Projected straight into DTOs)
    """

    ENTITY = "entity"
    DTO = "dto"


def _to_simple(order: Order) -> OrderSimpleQueryDto:
    address = order.delivery.address
    return OrderSimpleQueryDto(
        order_id=order.id,
        name=order.member.name,
        order_date=order.order_date,
        status=order.status,
        address=address_of(address.city, address.street, address.zipcode) if address else AddressSchema(),
    )


class OrderQueryService:
    """주문 조회 전용 서비스 (Order read service)."""

    async def load_orders(
        self,
        db: AsyncSession,
        search: OrderSearch,
        policy: FetchPolicy = FetchPolicy.DTO_BATCH,
        offset: int = 0,
        limit: int | None = None,
    ) -> OrderAggregateListResponse:
        """주문 애그리거트 목록을 조회합니다.

        Load order aggregates with the requested policy and report the
        statement and row counts alongside them.

        Raises:
            BadRequestError: 음수 offset/limit (Negative offset or limit)
        """
        result: LoadResult = await order_aggregate_loader.load(
            db, search, policy=policy, offset=offset, limit=limit
        )
        return OrderAggregateListResponse(
            policy=result.policy,
            statement_count=result.statement_count,
            row_count=result.row_count,
            orders=result.orders,
        )

    async def find_simple_orders(
        self,
        db: AsyncSession,
        mode: SimpleOrderMode = SimpleOrderMode.DTO,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[OrderSimpleQueryDto]:
        """회원/배송만 포함한 주문 요약 목록.

        Order summaries with member name and delivery address only. Both
        modes page in the database since to-one joins never duplicate rows.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            mode: 조회 방식 (entity | dto)
            offset: 시작 위치 (Orders to skip)
            limit: 최대 건수, 기본값 DEFAULT_PAGE_LIMIT (Max orders)

        Raises:
            BadRequestError: 음수 offset/limit (Negative offset or limit)
        """
        if limit is None:
            limit = settings.DEFAULT_PAGE_LIMIT
        if offset < 0 or limit < 0:
            raise BadRequestError("offset and limit must not be negative")
        limit = min(limit, settings.ORDER_SEARCH_MAX_RESULTS)

        if SimpleOrderMode(mode) is SimpleOrderMode.ENTITY:
            orders = await order_repository.find_all_with_member_delivery(db, offset=offset, limit=limit)
            return [_to_simple(order) for order in orders]
        return await order_repository.find_order_dtos(db, offset=offset, limit=limit)

    async def find_flat_orders(
        self,
        db: AsyncSession,
        search: OrderSearch,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[OrderFlatDto]:
        """전체 조인 평면 행을 주문 단위 페이지로 반환합니다.

        Raw flat join rows for a window of orders. The window counts orders,
        not rows, and is applied in memory since the join repeats each order
        once per line. ``limit`` defaults to and never exceeds
        ORDER_SEARCH_MAX_RESULTS.

        Raises:
            BadRequestError: 음수 offset/limit (Negative offset or limit)
        """
        cap: int = settings.ORDER_SEARCH_MAX_RESULTS
        if offset < 0 or (limit is not None and limit < 0):
            raise BadRequestError("offset and limit must not be negative")
        limit = cap if limit is None else min(limit, cap)

        rows = await order_query_repository.find_all_by_dto_flat(db, search)
        # 처음 나온 순서대로 주문 ID 구간 선택 (Window over first-seen order ids)
        order_ids: list[int] = list(dict.fromkeys(row.order_id for row in rows))
        window: set[int] = set(order_ids[offset:offset + limit])
        return [row for row in rows if row.order_id in window]


# 싱글턴 인스턴스 — Singleton instance
order_query_service: OrderQueryService = OrderQueryService()
