"""상품 관련 Pydantic 요청/응답 스키마 정의.

Item Pydantic request/response schema definitions.
"""

from pydantic import BaseModel, Field


class ItemCreate(BaseModel):
    """상품 등록 요청 스키마.

    Item registration request schema.
    """

    name: str = Field(..., min_length=1)  # 상품명 (Item name)
    price: int = Field(..., ge=0)  # 가격 (Unit price)
    stock_quantity: int = Field(..., ge=0)  # 재고 수량 (Initial stock)


class ItemUpdate(BaseModel):
    """상품 수정 요청 스키마 (부분 업데이트).

    Item update request schema (partial update).
    """

    name: str | None = None  # 변경할 상품명 (New name, optional)
    price: int | None = Field(default=None, ge=0)  # 변경할 가격 (New price, optional)
    stock_quantity: int | None = Field(default=None, ge=0)  # 변경할 재고 (New stock, optional)


class ItemResponse(BaseModel):
    """상품 응답 스키마 (Item response schema)."""

    id: int  # 상품 ID (Item identifier)
    name: str  # 상품명 (Item name)
    price: int  # 가격 (Unit price)
    stock_quantity: int  # 재고 수량 (Units in stock)
