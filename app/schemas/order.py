"""주문 관련 Pydantic 요청/응답 스키마 정의.

Order Pydantic request/response schema definitions.
Besides plain request/response shapes this module holds the DTOs the
query repositories project into directly:

    OrderSimpleQueryDto: 주문 + 회원 + 배송 (to-one only summary)
    OrderQueryDto:       주문 애그리거트 (order with its order items)
    OrderItemQueryDto:   주문상품 한 줄 (one order line, keyed by order_id)
    OrderFlatDto:        전체 조인 한 행 (one row of the five-table join)
"""

import enum
from datetime import datetime

from pydantic import BaseModel, Field

from app.models.order import DeliveryStatus, OrderStatus
from app.schemas.common import AddressSchema


class FetchPolicy(str, enum.Enum):
    """주문 애그리거트 로딩 전략.

    Loading policy for Order aggregates.

        lazy:        루트 1번 + 연관관계마다 N번 (1 + N per association)
        join_fetch:  컬렉션 페치 조인 1번, 페이징은 메모리에서 (one query, in-memory paging)
        batch_fetch: to-one 페치 조인 + 컬렉션 IN 배치 로딩 (to-one join, batched collection)
        dto_batch:   DTO 루트 1번 + 주문상품 IN 쿼리 1번 (2 queries)
        dto_flat:    전체 조인 DTO 1번, 페이징은 메모리에서 (one query, in-memory paging)
    """

    LAZY = "lazy"
    JOIN_FETCH = "join_fetch"
    BATCH_FETCH = "batch_fetch"
    DTO_BATCH = "dto_batch"
    DTO_FLAT = "dto_flat"


class OrderSearch(BaseModel):
    """주문 검색 조건.

    Order search filter. Both conditions are optional; an empty search
    matches every order.

    Attributes:
        status: 주문 상태 (ORDER | CANCEL, optional)
        member_name: 회원 이름 부분 문자열 (Member name substring, optional)
    """

    status: OrderStatus | None = None  # 주문 상태 필터 (Status filter)
    member_name: str | None = None  # 회원 이름 부분 일치 (Member name substring)


# === 요청 (Request) 스키마 ===

class OrderCreate(BaseModel):
    """주문 생성 요청 스키마.

    Order placement request: one member orders ``count`` units of one item.
    """

    member_id: int  # 주문 회원 ID (Ordering member)
    item_id: int  # 주문 상품 ID (Ordered item)
    count: int = Field(..., ge=1)  # 주문 수량 (Quantity, at least 1)


# === 엔티티 응답 (Entity response) 스키마 ===

class OrderLineResponse(BaseModel):
    """주문상품 응답 (Order line response)."""

    item_id: int
    item_name: str
    order_price: int
    count: int


class OrderResponse(BaseModel):
    """주문 상세 응답 스키마.

    Order detail response built from a fully loaded Order entity.

    Attributes:
        id: 주문 ID (Order identifier)
        member_id: 회원 ID (Member identifier)
        member_name: 회원 이름 (Member name)
        order_date: 주문 일시 (Order timestamp)
        status: 주문 상태 (ORDER | CANCEL)
        delivery_status: 배송 상태 (READY | COMP)
        address: 배송 주소 (Delivery address)
        total_price: 총 금액 (Sum of order_price * count)
        order_items: 주문상품 목록 (Order lines)
    """

    id: int  # 주문 ID (Order identifier)
    member_id: int  # 회원 ID (Member identifier)
    member_name: str  # 회원 이름 (Member name)
    order_date: datetime  # 주문 일시 (Order timestamp)
    status: OrderStatus  # 주문 상태 (Order status)
    delivery_status: DeliveryStatus  # 배송 상태 (Delivery status)
    address: AddressSchema  # 배송 주소 (Delivery address)
    total_price: int  # 총 금액 (Order total)
    order_items: list[OrderLineResponse] = []  # 주문상품 목록 (Order lines)


# === 조회 전용 DTO (Query DTOs) ===

class OrderSimpleQueryDto(BaseModel):
    """to-one 관계만 포함한 주문 요약 DTO.

    Order summary with to-one associations only (member name, delivery address).
    """

    order_id: int  # 주문 ID (Order identifier)
    name: str  # 회원 이름 (Member name)
    order_date: datetime  # 주문 일시 (Order timestamp)
    status: OrderStatus  # 주문 상태 (Order status)
    address: AddressSchema  # 배송 주소 (Delivery address)


class OrderItemQueryDto(BaseModel):
    """주문상품 조회 DTO — order_id로 부모 주문에 매핑됩니다.

    Order line DTO; ``order_id`` is the grouping key back to the parent.
    """

    order_id: int  # 부모 주문 ID (Parent order identifier)
    item_name: str  # 상품명 (Item name)
    order_price: int  # 주문 가격 (Price paid)
    count: int  # 주문 수량 (Quantity)


class OrderQueryDto(BaseModel):
    """주문 애그리거트 DTO — 모든 로딩 전략의 공통 결과 형태.

    Normalized Order aggregate returned by every loading policy.
    """

    order_id: int  # 주문 ID (Order identifier)
    name: str  # 회원 이름 (Member name)
    order_date: datetime  # 주문 일시 (Order timestamp)
    status: OrderStatus  # 주문 상태 (Order status)
    address: AddressSchema  # 배송 주소 (Delivery address)
    order_items: list[OrderItemQueryDto] = []  # 주문상품 목록, id 순 (Order lines, in id order)


class OrderFlatDto(BaseModel):
    """전체 조인 결과 한 행 — 주문상품 수만큼 주문 정보가 중복됩니다.

    One row of the order/member/delivery/order_item/item join. Order
    columns repeat once per order line; line columns are null for an
    order without lines.
    """

    order_id: int
    name: str
    order_date: datetime
    status: OrderStatus
    address: AddressSchema
    item_name: str | None = None
    order_price: int | None = None
    count: int | None = None


class OrderAggregateListResponse(BaseModel):
    """주문 애그리거트 목록 응답 — 사용한 전략과 실행 쿼리 수 포함.

    Order aggregate list response with the policy used and the number of
    SQL statements it took.

    Attributes:
        policy: 로딩 전략 (Loading policy used)
        statement_count: 실행된 SQL 수 (SQL statements executed)
        row_count: DB에서 받은 행 수 (Rows received from the database)
        orders: 주문 애그리거트 목록 (Order aggregates)
    """

    policy: FetchPolicy  # 로딩 전략 (Loading policy)
    statement_count: int  # 실행된 SQL 수 (Statements executed)
    row_count: int  # 수신 행 수 (Rows fetched, shows join duplication)
    orders: list[OrderQueryDto]  # 주문 애그리거트 목록 (Aggregates)
