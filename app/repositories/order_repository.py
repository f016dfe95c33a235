"""주문 레포지토리 — 주문 엔티티 조회 및 검색.

Order Repository — Entity-returning order queries.

쿼리 방식 선택 권장 순서 (Recommended order when choosing a query style):
    1. 엔티티를 조회해서 DTO로 변환한다 (Load entities, convert to DTOs).
    2. 필요하면 페치 조인으로 최적화한다 (Add fetch joins where needed).
    3. 그래도 안되면 DTO로 직접 조회한다 (Project straight into DTOs,
       see order_query_repository).
    4. 최후의 방법은 네이티브 SQL (Raw SQL as the last resort).
"""

from typing import Any, Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, joinedload, selectinload

from app.config import settings
from app.models.member import Member
from app.models.order import Delivery, Order, OrderItem
from app.repositories.base import BaseRepository
from app.schemas.common import AddressSchema
from app.schemas.order import OrderSearch, OrderSimpleQueryDto


def search_conditions(search: OrderSearch | None) -> list[Any]:
    """검색 조건을 WHERE 절 목록으로 변환합니다.

    Build the WHERE criteria for an order search. Unset conditions are
    skipped, so an empty search yields no criteria. The caller must have
    Member joined for the name condition.

    Args:
        search: 검색 조건 (Search filter, may be None)

    Returns:
        list: SQLAlchemy 조건식 목록 (Criteria to pass to ``where``)
    """
    if search is None:
        return []

    criteria: list[Any] = []
    # 주문 상태 검색 — Status condition
    if search.status is not None:
        criteria.append(Order.status == search.status)
    # 회원 이름 검색 — Member name substring (% and _ are matched literally)
    if search.member_name and search.member_name.strip():
        criteria.append(Member.name.contains(search.member_name, autoescape=True))
    return criteria


def address_of(city: str | None, street: str | None, zipcode: str | None) -> AddressSchema:
    return AddressSchema(city=city, street=street, zipcode=zipcode)


class OrderRepository(BaseRepository[Order]):
    """주문 엔티티 레포지토리.

    Order entity repository. Every list query orders by order id so the
    different fetch strategies return orders in the same sequence.
    """

    def __init__(self) -> None:
        super().__init__(Order)

    async def find_one(self, db: AsyncSession, order_id: int) -> Order | None:
        """주문 하나를 전체 그래프와 함께 조회합니다.

        Retrieve one order with member, delivery, and order items/items
        loaded, ready for cancel() or a detail response.

        Returns:
            Order | None: 주문 또는 None (Order, or None if the id is unknown)
        """
        query: Select = (
            select(Order)
            .options(
                joinedload(Order.member),
                joinedload(Order.delivery),
                selectinload(Order.order_items).joinedload(OrderItem.item),
            )
            .where(Order.id == order_id)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def search(
        self,
        db: AsyncSession,
        search: OrderSearch,
        offset: int | None = None,
        max_results: int | None = None,
    ) -> Sequence[Order]:
        """상태/회원 이름으로 주문을 검색합니다 (최대 1000건).

        Search orders by status and member name substring. Results are
        capped at ``ORDER_SEARCH_MAX_RESULTS`` unless a smaller cap is given.
        Only the order rows are loaded; associations stay unloaded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            search: 검색 조건 (Search filter)
            offset: 시작 위치 (Rows to skip, optional)
            max_results: 최대 건수 (Row cap, defaults to the configured cap)

        Returns:
            Sequence[Order]: 검색된 주문 목록 (Matching orders)
        """
        cap: int = max_results if max_results is not None else settings.ORDER_SEARCH_MAX_RESULTS
        query: Select = (
            select(Order)
            .join(Order.member)
            .where(*search_conditions(search))
            .order_by(Order.id)
            .limit(cap)
        )
        if offset is not None:
            query = query.offset(offset)
        result = await db.execute(query)
        return result.scalars().all()

    async def find_all_with_member_delivery(
        self,
        db: AsyncSession,
        search: OrderSearch | None = None,
        offset: int | None = None,
        limit: int | None = None,
        batch_order_items: bool = False,
    ) -> Sequence[Order]:
        """회원/배송을 페치 조인으로 함께 조회합니다.

        Load orders with member and delivery fetched in the same query.
        to-one 페치 조인은 행 수를 늘리지 않으므로 DB 페이징이 안전합니다.
        To-one joins do not multiply rows, so OFFSET/LIMIT stay in the database.

        컬렉션은 기본적으로 로딩하지 않습니다. batch_order_items=True이면
        페이지의 주문 ID로 주문상품+상품을 IN 절로 한 번에 가져옵니다
        (With batch_order_items the page's lines and items arrive in one
        extra IN query instead of one query per order).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            search: 검색 조건 (Optional search filter)
            offset: 시작 위치 (Rows to skip, optional)
            limit: 최대 건수 (Max rows, optional)
            batch_order_items: 주문상품 IN 배치 로딩 여부 (Batch-load order lines)

        Returns:
            Sequence[Order]: member/delivery가 로드된 주문 목록
        """
        query: Select = (
            select(Order)
            .join(Order.member)
            .join(Order.delivery)
            .options(contains_eager(Order.member), contains_eager(Order.delivery))
            .where(*search_conditions(search))
            .order_by(Order.id)
        )
        if batch_order_items:
            query = query.options(selectinload(Order.order_items).joinedload(OrderItem.item))
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await db.execute(query)
        return result.scalars().all()

    async def find_all_with_item(
        self,
        db: AsyncSession,
        search: OrderSearch | None = None,
    ) -> tuple[Sequence[Order], int]:
        """주문상품/상품까지 컬렉션 페치 조인으로 한 번에 조회합니다.

        Load the whole aggregate in a single query with a collection fetch
        join. 일대다 조인이라 주문 행이 주문상품 수만큼 중복되며, unique()로
        루트 엔티티 중복을 제거합니다 (Rows repeat once per order line;
        unique() collapses them back to one Order each).

        페이징 불가 — 컬렉션 페치 조인에서 OFFSET/LIMIT을 걸면 주문이 아닌
        행 기준으로 잘립니다. Never page this query in SQL: the window would
        cut rows, not orders.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            search: 검색 조건 (Optional search filter)

        Returns:
            tuple[Sequence[Order], int]: (중복 제거된 주문 목록, 수신 행 수)
                (Distinct orders, number of joined rows received)
        """
        query: Select = (
            select(Order)
            .join(Order.member)
            .join(Order.delivery)
            .outerjoin(Order.order_items)
            .outerjoin(OrderItem.item)
            .options(
                contains_eager(Order.member),
                contains_eager(Order.delivery),
                contains_eager(Order.order_items).contains_eager(OrderItem.item),
            )
            .where(*search_conditions(search))
            .order_by(Order.id, OrderItem.id)
        )
        result = await db.execute(query)
        rows = result.unique().scalars().all()
        # unique() 이전 행 수는 주문상품 수와 같음 (items-less orders still yield one row)
        row_count: int = sum(max(len(order.order_items), 1) for order in rows)
        return rows, row_count

    async def find_order_dtos(
        self,
        db: AsyncSession,
        search: OrderSearch | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[OrderSimpleQueryDto]:
        """to-one 관계만 DTO로 직접 조회합니다.

        Project order, member name, and delivery address straight into
        OrderSimpleQueryDto. 화면에 최적화되어 재사용성은 낮습니다
        (Shaped for one screen; little reuse).

        Returns:
            list[OrderSimpleQueryDto]: 주문 요약 목록 (Order summaries)
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
            OrderSimpleQueryDto(
                order_id=order_id,
                name=name,
                order_date=order_date,
                status=status,
                address=address_of(city, street, zipcode),
            )
            for order_id, name, order_date, status, city, street, zipcode in result.all()
        ]


# 싱글턴 인스턴스 — Singleton instance
order_repository: OrderRepository = OrderRepository()
