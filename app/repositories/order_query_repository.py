"""주문 조회 전용 레포지토리 — 엔티티가 아닌 DTO로 직접 조회.

Order query repository — Projects straight into DTOs instead of loading
entities. Three formulations of the same aggregate read:

    find_order_query_dtos:        루트 1번 + 주문마다 1번 (1 + N, baseline)
    find_all_by_dto_optimization: 루트 1번 + IN 절 1번 (2 queries)
    find_all_by_dto_flat:         전체 조인 1번 (1 query, duplicated rows)
"""

from collections import defaultdict
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.item import Item
from app.models.member import Member
from app.models.order import Delivery, Order, OrderItem
from app.repositories.order_repository import address_of, search_conditions
from app.schemas.order import (
    OrderFlatDto,
    OrderItemQueryDto,
    OrderQueryDto,
    OrderSearch,
)


class OrderQueryRepository:
    """주문 DTO 조회 레포지토리.

    Stateless facade issuing DTO projections. Every method accepts the same
    OrderSearch filter and orders parents by order id and children by order
    item id.
    """

    # ------------------------------------------------------------------
    # 루트 조회 — Root (to-one) projection
    # ------------------------------------------------------------------
    async def find_orders(
        self,
        db: AsyncSession,
        search: OrderSearch | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[OrderQueryDto]:
        """to-one 관계를 한 번에 조인해서 주문 DTO를 조회합니다.

        Fetch root DTOs (order + member + delivery) in one query. The
        order_items list is left empty for the caller to fill.
        """
        delivery_table = Delivery.__table__
        query: Select = (
            select(
                Order.id,
                Member.name,
                Order.order_date,
                Order.status,
                delivery_table.c.city,
                delivery_table.c.street,
                delivery_table.c.zipcode,
            )
            .join(Order.member)
            .join(Order.delivery)
            .where(*search_conditions(search))
            .order_by(Order.id)
        )
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await db.execute(query)
        return [
            OrderQueryDto(
                order_id=order_id,
                name=name,
                order_date=order_date,
                status=status,
                address=address_of(city, street, zipcode),
            )
            for order_id, name, order_date, status, city, street, zipcode in result.all()
        ]

    # ------------------------------------------------------------------
    # 주문상품 조회 — Order line projections
    # ------------------------------------------------------------------
    @staticmethod
    def _order_item_query() -> Select:
        return (
            select(OrderItem.order_id, Item.name, OrderItem.order_price, OrderItem.count)
            .join(OrderItem.item)
            .order_by(OrderItem.order_id, OrderItem.id)
        )

    @staticmethod
    def _to_order_items(rows: Any) -> list[OrderItemQueryDto]:
        return [
            OrderItemQueryDto(order_id=order_id, item_name=item_name, order_price=order_price, count=count)
            for order_id, item_name, order_price, count in rows
        ]

    async def find_order_items(self, db: AsyncSession, order_id: int) -> list[OrderItemQueryDto]:
        """주문 하나의 주문상품을 조회합니다 (Lines of one order)."""
        result = await db.execute(self._order_item_query().where(OrderItem.order_id == order_id))
        return self._to_order_items(result.all())

    async def find_order_item_map(
        self,
        db: AsyncSession,
        order_ids: list[int],
    ) -> dict[int, list[OrderItemQueryDto]]:
        """여러 주문의 주문상품을 IN 절 한 번으로 조회해서 맵으로 묶습니다.

        Fetch the lines of many orders with one ``IN`` query and group them
        by order id. 맵으로 매칭하므로 조립은 O(1) (Matching is a dict lookup).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            order_ids: 주문 ID 목록 (Parent order ids)

        Returns:
            dict[int, list[OrderItemQueryDto]]: 주문 ID별 주문상품 목록
                (Order lines keyed by order id; ids without lines are absent)
        """
        if not order_ids:
            return {}

        result = await db.execute(self._order_item_query().where(OrderItem.order_id.in_(order_ids)))
        order_item_map: dict[int, list[OrderItemQueryDto]] = defaultdict(list)
        for order_item in self._to_order_items(result.all()):
            order_item_map[order_item.order_id].append(order_item)
        return dict(order_item_map)

    # ------------------------------------------------------------------
    # 애그리거트 조회 — Aggregate reads
    # ------------------------------------------------------------------
    async def find_order_query_dtos(
        self,
        db: AsyncSession,
        search: OrderSearch | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[OrderQueryDto]:
        """루트 조회 후 주문마다 주문상품을 따로 조회합니다 (N+1).

        Root query, then one query per order for its lines. Kept as the
        baseline the batched variant is measured against.
        """
        result: list[OrderQueryDto] = await self.find_orders(db, search, offset, limit)
        for order in result:
            order.order_items = await self.find_order_items(db, order.order_id)
        return result

    async def find_all_by_dto_optimization(
        self,
        db: AsyncSession,
        search: OrderSearch | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[OrderQueryDto]:
        """루트 1번, 컬렉션 1번 — IN 절 배치 조회 후 메모리에서 조립.

        Root query once, then every order's lines in one IN query, assembled
        through a map keyed by order id. Paging stays in the database since
        the root query returns one row per order.
        """
        # 루트 조회 (to-one 관계는 한 번에) — Root query
        result: list[OrderQueryDto] = await self.find_orders(db, search, offset, limit)

        # 주문상품 컬렉션을 맵으로 한 번에 조회 — Lines for all roots at once
        order_item_map = await self.find_order_item_map(db, [order.order_id for order in result])

        # 추가 쿼리 없이 메모리에서 조립 — Assemble in memory
        for order in result:
            order.order_items = order_item_map.get(order.order_id, [])
        return result

    async def find_all_by_dto_flat(
        self,
        db: AsyncSession,
        search: OrderSearch | None = None,
    ) -> list[OrderFlatDto]:
        """주문/회원/배송/주문상품/상품을 한 번에 조인해서 평면 행으로 조회합니다.

        One query joining all five tables. 일대다 조인이라 주문 정보가
        주문상품 수만큼 중복되어 전송되고, 애플리케이션에서 다시 묶어야 합니다
        (Order columns repeat per line; the caller regroups them).
        주문상품이 없는 주문도 한 행으로 나오도록 외부 조인합니다
        (Outer joins keep orders without lines as one row with null line columns).
        """
        delivery_table = Delivery.__table__
        query: Select = (
            select(
                Order.id,
                Member.name,
                Order.order_date,
                Order.status,
                delivery_table.c.city,
                delivery_table.c.street,
                delivery_table.c.zipcode,
                Item.name,
                OrderItem.order_price,
                OrderItem.count,
            )
            .join(Order.member)
            .join(Order.delivery)
            .outerjoin(Order.order_items)
            .outerjoin(OrderItem.item)
            .where(*search_conditions(search))
            .order_by(Order.id, OrderItem.id)
        )
        result = await db.execute(query)
        return [
            OrderFlatDto(
                order_id=row[0],
                name=row[1],
                order_date=row[2],
                status=row[3],
                address=address_of(row[4], row[5], row[6]),
                item_name=row[7],
                order_price=row[8],
                count=row[9],
            )
            for row in result.all()
        ]


# 싱글턴 인스턴스 — Singleton instance
order_query_repository: OrderQueryRepository = OrderQueryRepository()
