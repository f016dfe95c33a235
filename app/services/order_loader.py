"""주문 애그리거트 로더 — 로딩 전략별 주문 조회를 하나의 결과 형태로.

Order aggregate loader — Runs one of five loading policies and always
returns the same normalized shape: orders in id order, each holding its
order lines in id order.

    Policy       Queries                 Row duplication  Paging
    -----------  ----------------------  ---------------  ---------
    lazy         1 + N per association   none             database
    join_fetch   1                       per order line   in memory
    batch_fetch  1 + batched IN          none             database
    dto_batch    2                       none             database
    dto_flat     1                       per order line   in memory

전략과 무관하게 같은 검색 조건/페이지 구간이면 결과가 같아야 하며, 차이는
실행 쿼리 수와 전송 행 수뿐입니다. For the same filter and window every
policy returns equal results; only statement and row counts differ.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.order import Order
from app.repositories.order_query_repository import order_query_repository
from app.repositories.order_repository import address_of, order_repository
from app.schemas.common import AddressSchema
from app.schemas.order import (
    FetchPolicy,
    OrderFlatDto,
    OrderItemQueryDto,
    OrderQueryDto,
    OrderSearch,
)
from app.utils.exceptions import BadRequestError
from app.utils.query_counter import count_statements

logger = logging.getLogger(__name__)

# (orders, rows received) — 전략 구현의 공통 반환형 (Common strategy return)
_Loaded = tuple[list[OrderQueryDto], int]


@dataclass
class LoadResult:
    """로딩 결과 — 주문 목록과 측정값.

    Attributes:
        orders: 주문 애그리거트 목록 (Normalized aggregates)
        policy: 사용한 로딩 전략 (Policy used)
        statement_count: 실행된 SQL 수 (Statements executed)
        row_count: 주문/주문상품 행 수 (Order and order-line rows received)
    """

    orders: list[OrderQueryDto]
    policy: FetchPolicy
    statement_count: int
    row_count: int


def _to_aggregate(order: Order) -> OrderQueryDto:
    """로딩된 주문 엔티티를 애그리거트 DTO로 변환합니다.

    Convert a loaded Order entity (member, delivery, order_items.item all
    present) to the normalized DTO.
    """
    address = order.delivery.address
    return OrderQueryDto(
        order_id=order.id,
        name=order.member.name,
        order_date=order.order_date,
        status=order.status,
        address=address_of(address.city, address.street, address.zipcode) if address else AddressSchema(),
        order_items=[
            OrderItemQueryDto(
                order_id=order.id,
                item_name=order_item.item.name,
                order_price=order_item.order_price,
                count=order_item.count,
            )
            for order_item in order.order_items
        ],
    )


def _regroup(rows: Sequence[OrderFlatDto]) -> list[OrderQueryDto]:
    """평면 행을 주문 ID별로 다시 묶습니다 (처음 나온 순서 유지).

    Fold flat join rows back into aggregates keyed by order id, keeping
    first-seen order. Rows with null line columns contribute no line.
    """
    grouped: dict[int, OrderQueryDto] = {}
    for row in rows:
        order = grouped.get(row.order_id)
        if order is None:
            order = OrderQueryDto(
                order_id=row.order_id,
                name=row.name,
                order_date=row.order_date,
                status=row.status,
                address=row.address,
            )
            grouped[row.order_id] = order
        if row.item_name is not None:
            order.order_items.append(
                OrderItemQueryDto(
                    order_id=row.order_id,
                    item_name=row.item_name,
                    order_price=row.order_price,
                    count=row.count,
                )
            )
    return list(grouped.values())


def _line_count(orders: Sequence[OrderQueryDto]) -> int:
    return sum(len(order.order_items) for order in orders)


class OrderAggregateLoader:
    """로딩 전략을 받아 주문 애그리거트를 조회하는 컴포넌트.

    Aggregate-loading component. Stateless; one instance is shared.
    """

    def __init__(self) -> None:
        self._strategies: dict[
            FetchPolicy, Callable[[AsyncSession, OrderSearch, int, int, bool], Awaitable[_Loaded]]
        ] = {
            FetchPolicy.LAZY: self._load_lazy,
            FetchPolicy.JOIN_FETCH: self._load_join_fetch,
            FetchPolicy.BATCH_FETCH: self._load_batch_fetch,
            FetchPolicy.DTO_BATCH: self._load_dto_batch,
            FetchPolicy.DTO_FLAT: self._load_dto_flat,
        }

    async def load(
        self,
        db: AsyncSession,
        search: OrderSearch | None = None,
        policy: FetchPolicy = FetchPolicy.DTO_BATCH,
        offset: int = 0,
        limit: int | None = None,
    ) -> LoadResult:
        """검색 조건에 맞는 주문 애그리거트를 지정한 전략으로 조회합니다.

        Load the Order aggregates matching ``search`` with the given policy.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            search: 검색 조건, None이면 전체 (Filter; None matches everything)
            policy: 로딩 전략 (Loading policy)
            offset: 건너뛸 주문 수 (Orders to skip)
            limit: 최대 주문 수, 검색 상한(1000)을 넘지 않음
                   (Max orders; never above the search cap)

        Returns:
            LoadResult: 주문 목록과 실행 쿼리/행 수 (Aggregates and measurements)

        Raises:
            BadRequestError: offset 또는 limit이 음수 (Negative offset or limit)
        """
        if offset < 0 or (limit is not None and limit < 0):
            raise BadRequestError("offset and limit must not be negative")

        policy = FetchPolicy(policy)
        cap: int = settings.ORDER_SEARCH_MAX_RESULTS
        window_requested: bool = offset > 0 or limit is not None
        effective_limit: int = cap if limit is None else min(limit, cap)
        strategy = self._strategies[policy]

        async with count_statements(db) as counter:
            orders, row_count = await strategy(
                db, search or OrderSearch(), offset, effective_limit, window_requested
            )

        logger.debug(
            "Loaded %d orders with policy=%s statements=%d rows=%d",
            len(orders), policy.value, counter.count, row_count,
        )
        return LoadResult(
            orders=orders,
            policy=policy,
            statement_count=counter.count,
            row_count=row_count,
        )

    # ------------------------------------------------------------------
    # 엔티티 기반 전략 — Entity strategies
    # ------------------------------------------------------------------
    async def _load_lazy(
        self, db: AsyncSession, search: OrderSearch, offset: int, limit: int, window_requested: bool
    ) -> _Loaded:
        # 루트 1번, 이후 연관관계 접근마다 지연 로딩 (Root once, then one load per association access)
        orders = await order_repository.search(db, search, offset=offset, max_results=limit)
        for order in orders:
            await order.awaitable_attrs.member
            await order.awaitable_attrs.delivery
            for order_item in await order.awaitable_attrs.order_items:
                await order_item.awaitable_attrs.item
        result = [_to_aggregate(order) for order in orders]
        return result, len(result) + _line_count(result)

    async def _load_join_fetch(
        self, db: AsyncSession, search: OrderSearch, offset: int, limit: int, window_requested: bool
    ) -> _Loaded:
        orders, row_count = await order_repository.find_all_with_item(db, search)
        if window_requested:
            logger.warning(
                "Collection fetch join with offset=%d limit=%d: all %d orders read, paging applied in memory",
                offset, limit, len(orders),
            )
        return [_to_aggregate(order) for order in orders[offset:offset + limit]], row_count

    async def _load_batch_fetch(
        self, db: AsyncSession, search: OrderSearch, offset: int, limit: int, window_requested: bool
    ) -> _Loaded:
        orders = await order_repository.find_all_with_member_delivery(
            db, search, offset=offset, limit=limit, batch_order_items=True
        )
        result = [_to_aggregate(order) for order in orders]
        return result, len(result) + _line_count(result)

    # ------------------------------------------------------------------
    # DTO 직접 조회 전략 — DTO strategies
    # ------------------------------------------------------------------
    async def _load_dto_batch(
        self, db: AsyncSession, search: OrderSearch, offset: int, limit: int, window_requested: bool
    ) -> _Loaded:
        result = await order_query_repository.find_all_by_dto_optimization(db, search, offset, limit)
        return result, len(result) + _line_count(result)

    async def _load_dto_flat(
        self, db: AsyncSession, search: OrderSearch, offset: int, limit: int, window_requested: bool
    ) -> _Loaded:
        rows = await order_query_repository.find_all_by_dto_flat(db, search)
        if window_requested:
            logger.warning(
                "Flat order projection with offset=%d limit=%d: %d rows read, paging applied in memory",
                offset, limit, len(rows),
            )
        return _regroup(rows)[offset:offset + limit], len(rows)


# 싱글턴 인스턴스 — Singleton instance
order_aggregate_loader: OrderAggregateLoader = OrderAggregateLoader()
