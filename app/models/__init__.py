"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    member: 회원 및 주소 값 타입 (Member and the Address value type)
    item: 상품 (Items with stock)
    order: 주문, 주문상품, 배송 (Order, OrderItem, Delivery and status enums)
"""

from app.models.member import Address, Member
from app.models.item import Item
from app.models.order import Delivery, DeliveryStatus, Order, OrderItem, OrderStatus

__all__ = [
    "Address", "Member",
    "Item",
    "Delivery", "DeliveryStatus", "Order", "OrderItem", "OrderStatus",
]
