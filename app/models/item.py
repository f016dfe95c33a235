"""상품 SQLAlchemy ORM 모델 정의.

Item SQLAlchemy ORM model definition.

Tables:
    - item: 상품 (Sellable items with price and stock)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.utils.exceptions import NotEnoughStockError


class Item(Base):
    """상품 모델 — 재고 증감 로직을 엔티티가 직접 가집니다.

    Item model. Stock changes go through add_stock/remove_stock so the
    quantity can never drop below zero.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        name: 상품명 (Item name)
        price: 가격 (Unit price)
        stock_quantity: 재고 수량 (Units in stock)
    """

    __tablename__ = "item"

    id: Mapped[int] = mapped_column("item_id", Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def add_stock(self, quantity: int) -> None:
        """재고를 늘립니다 (Increase stock)."""
        self.stock_quantity += quantity

    def remove_stock(self, quantity: int) -> None:
        """재고를 줄입니다. 재고보다 많이 빼면 예외.

        Decrease stock.

        Raises:
            NotEnoughStockError: 남은 재고가 음수가 되는 경우 (Stock would go negative)
        """
        rest_stock: int = self.stock_quantity - quantity
        if rest_stock < 0:
            raise NotEnoughStockError("need more stock")
        self.stock_quantity = rest_stock
