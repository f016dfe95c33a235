"""주문 관련 SQLAlchemy ORM 모델 정의.

Order-related SQLAlchemy ORM model definitions.
An Order aggregate is one member, one delivery, and an ordered list of
order items, each pointing at an item.

Tables:
    - orders: 주문 (Orders; "order" is a reserved word)
    - order_item: 주문상품 (Order lines with the price paid and quantity)
    - delivery: 배송 (Delivery address and status)

Relationship loading:
    모든 연관관계는 기본 lazy="select" 입니다. AsyncSession에서는 암묵적 지연
    로딩이 불가능하므로 조회 쪽에서 로딩 전략(joinedload, selectinload,
    awaitable_attrs)을 명시해야 합니다.
    All associations use the default lazy="select". Callers pick the
    loading strategy explicitly since implicit lazy loads are not allowed
    under AsyncSession.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, composite, mapped_column, relationship

from app.database import Base
from app.models.item import Item
from app.models.member import Address, Member
from app.utils.exceptions import OrderCancelError


class OrderStatus(str, enum.Enum):
    """주문 상태 — ORDER(주문), CANCEL(취소)."""

    ORDER = "ORDER"
    CANCEL = "CANCEL"


class DeliveryStatus(str, enum.Enum):
    """배송 상태 — READY(준비), COMP(완료)."""

    READY = "READY"
    COMP = "COMP"


class Delivery(Base):
    """배송 모델.

    Delivery model — Shipping address and status, one per order.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        address: 배송 주소 (Address composite)
        status: 배송 상태 (READY -> COMP)
    """

    __tablename__ = "delivery"

    id: Mapped[int] = mapped_column("delivery_id", Integer, primary_key=True, autoincrement=True)
    address: Mapped[Address] = composite(
        mapped_column("city", String(100), nullable=True),
        mapped_column("street", String(255), nullable=True),
        mapped_column("zipcode", String(20), nullable=True),
    )
    status: Mapped[DeliveryStatus] = mapped_column(
        Enum(DeliveryStatus, native_enum=False, length=10),
        default=DeliveryStatus.READY,
        nullable=False,
    )

    order = relationship("Order", back_populates="delivery", uselist=False)


class Order(Base):
    """주문 모델 — 주문 애그리거트 루트.

    Order model — Aggregate root. Creation and cancellation go through
    Order.create / Order.cancel so stock stays consistent.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        member_id: 주문 회원 FK (Ordering member)
        delivery_id: 배송 FK (Delivery, one-to-one)
        order_date: 주문 일시 UTC (Order timestamp)
        status: 주문 상태 (ORDER | CANCEL)

    Relationships:
        member: 주문 회원 (many-to-one)
        delivery: 배송 정보 (one-to-one, cascade save)
        order_items: 주문상품 목록 (one-to-many, ordered by id)
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column("order_id", Integer, primary_key=True, autoincrement=True)
    # 주문 회원 FK — Ordering member
    member_id: Mapped[int] = mapped_column(ForeignKey("member.member_id"), nullable=False, index=True)
    # 배송 FK — Delivery for this order
    delivery_id: Mapped[int] = mapped_column(ForeignKey("delivery.delivery_id"), nullable=False, unique=True)
    # 주문 일시 — Order timestamp (UTC)
    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
    # 주문 상태 — ORDER | CANCEL
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, native_enum=False, length=10),
        default=OrderStatus.ORDER,
        nullable=False,
        index=True,
    )

    # 관계 — Relationships
    member = relationship("Member", back_populates="orders")
    delivery = relationship("Delivery", back_populates="order", cascade="all")
    order_items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    # ------------------------------------------------------------------
    # 생성 메서드 — Factory
    # ------------------------------------------------------------------
    @classmethod
    def create(cls, member: Member, delivery: Delivery, *order_items: "OrderItem") -> "Order":
        """주문을 생성합니다 (Create an order in ORDER status)."""
        order = cls(
            member=member,
            delivery=delivery,
            status=OrderStatus.ORDER,
            order_date=datetime.now(timezone.utc),
        )
        for order_item in order_items:
            order.order_items.append(order_item)
        return order

    # ------------------------------------------------------------------
    # 비즈니스 로직 — Business logic (delivery, order_items, item must be loaded)
    # ------------------------------------------------------------------
    def cancel(self) -> None:
        """주문을 취소하고 재고를 복구합니다.

        Cancel the order and restore the stock of every line.

        Raises:
            OrderCancelError: 배송 완료되었거나 이미 취소된 주문
                              (Delivery already complete, or order already cancelled)
        """
        if self.delivery.status == DeliveryStatus.COMP:
            raise OrderCancelError("이미 배송완료된 상품은 취소가 불가능합니다. (Delivery already completed)")
        if self.status == OrderStatus.CANCEL:
            raise OrderCancelError("Order already cancelled")

        self.status = OrderStatus.CANCEL
        for order_item in self.order_items:
            order_item.cancel()

    def total_price(self) -> int:
        """전체 주문 가격 (Sum of every line's price * count)."""
        return sum(order_item.total_price() for order_item in self.order_items)


class OrderItem(Base):
    """주문상품 모델 — 주문 시점 가격과 수량.

    Order line: the item, the price paid at order time, and the quantity.
    """

    __tablename__ = "order_item"

    id: Mapped[int] = mapped_column("order_item_id", Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.order_id"), nullable=False, index=True)
    item_id: Mapped[int] = mapped_column(ForeignKey("item.item_id"), nullable=False)
    # 주문 가격 — Unit price at order time
    order_price: Mapped[int] = mapped_column(Integer, nullable=False)
    # 주문 수량 — Quantity
    count: Mapped[int] = mapped_column(Integer, nullable=False)

    order = relationship("Order", back_populates="order_items")
    item = relationship("Item")

    @classmethod
    def create(cls, item: Item, order_price: int, count: int) -> "OrderItem":
        """주문상품을 만들고 상품 재고를 차감합니다.

        Build an order line and take the quantity out of the item's stock.
        """
        order_item = cls(item=item, order_price=order_price, count=count)
        item.remove_stock(count)
        return order_item

    def cancel(self) -> None:
        """재고 원복 (Return the quantity to stock)."""
        self.item.add_stock(self.count)

    def total_price(self) -> int:
        return self.order_price * self.count
