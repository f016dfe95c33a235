"""주문 서비스 — 주문 생성, 취소, 상세 조회 비즈니스 로직.

Order Service — Business logic for placing, cancelling, and reading
orders. Stock bookkeeping lives on the entities (Order.create,
Order.cancel); this service loads what they need and delegates.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.item import Item
from app.models.member import Address, Member
from app.models.order import Delivery, Order, OrderItem
from app.repositories.item_repository import item_repository
from app.repositories.member_repository import member_repository
from app.repositories.order_repository import address_of, order_repository
from app.schemas.common import AddressSchema
from app.schemas.order import OrderCreate, OrderLineResponse, OrderResponse
from app.utils.exceptions import NotFoundError


class OrderService:
    """주문 관련 비즈니스 로직을 처리하는 서비스.

    Service handling order business logic.
    """

    def _to_response(self, order: Order) -> OrderResponse:
        """전체 그래프가 로드된 주문을 상세 응답으로 변환합니다.

        Convert an Order with member, delivery, and lines loaded to an
        OrderResponse.
        """
        address: Address | None = order.delivery.address
        return OrderResponse(
            id=order.id,
            member_id=order.member_id,
            member_name=order.member.name,
            order_date=order.order_date,
            status=order.status,
            delivery_status=order.delivery.status,
            address=address_of(address.city, address.street, address.zipcode) if address else AddressSchema(),
            total_price=order.total_price(),
            order_items=[
                OrderLineResponse(
                    item_id=oi.item_id,
                    item_name=oi.item.name,
                    order_price=oi.order_price,
                    count=oi.count,
                )
                for oi in order.order_items
            ],
        )

    async def order(self, db: AsyncSession, data: OrderCreate) -> OrderResponse:
        """주문을 생성합니다.

        Place an order: the delivery goes to the member's address, the line
        is priced at the item's current price, and the item's stock drops.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 주문 요청 (member_id, item_id, count)

        Returns:
            OrderResponse: 생성된 주문 (The new order)

        Raises:
            NotFoundError: 회원 또는 상품 없음 (Unknown member or item)
            NotEnoughStockError: 재고 부족 (Not enough stock)
        """
        # 엔티티 조회 — Load member and item
        member: Member | None = await member_repository.get_by_id(db, data.member_id)
        if member is None:
            raise NotFoundError("Member not found")
        item: Item | None = await item_repository.get_by_id(db, data.item_id)
        if item is None:
            raise NotFoundError("Item not found")

        # 배송정보 생성 — Delivery to the member's address
        member_address: Address | None = member.address
        delivery: Delivery = Delivery(
            address=Address(
                city=member_address.city if member_address else None,
                street=member_address.street if member_address else None,
                zipcode=member_address.zipcode if member_address else None,
            )
        )

        # 주문상품 생성 (재고 차감) — Order line, removes stock
        order_item: OrderItem = OrderItem.create(item, item.price, data.count)

        # 주문 생성 및 저장 (배송/주문상품은 cascade) — Order; delivery and lines cascade
        order: Order = Order.create(member, delivery, order_item)
        await order_repository.save(db, order)

        return self._to_response(order)

    async def cancel_order(self, db: AsyncSession, order_id: int) -> OrderResponse:
        """주문을 취소합니다 (재고 복구).

        Cancel an order and restore the stock of its lines.

        Raises:
            NotFoundError: 주문 없음 (Order not found)
            OrderCancelError: 배송완료 또는 이미 취소 (Delivered or already cancelled)
        """
        order: Order | None = await order_repository.find_one(db, order_id)
        if order is None:
            raise NotFoundError("Order not found")

        order.cancel()
        await db.flush()
        return self._to_response(order)

    async def get_order(self, db: AsyncSession, order_id: int) -> OrderResponse:
        """주문 상세 조회 (Order detail).

        Raises:
            NotFoundError: 주문 없음 (Order not found)
        """
        order: Order | None = await order_repository.find_one(db, order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return self._to_response(order)


# 싱글턴 인스턴스 — Singleton instance
order_service: OrderService = OrderService()
