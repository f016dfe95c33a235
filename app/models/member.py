"""회원 관련 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definitions.
Includes the Address value type shared with Delivery.

Tables:
    - member: 회원 (Shop members who place orders)
"""

from dataclasses import dataclass

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, composite, mapped_column, relationship

from app.database import Base


@dataclass
class Address:
    """주소 값 타입 — 회원/배송에 컬럼으로 펼쳐서 저장.

    Address value type, mapped as a composite of three columns
    on both member and delivery tables.
    """

    city: str | None = None
    street: str | None = None
    zipcode: str | None = None


class Member(Base):
    """회원 모델.

    Member model — The customer side of an order.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        name: 회원 이름 (Member name, used for order search)
        address: 주소 (Address composite: city, street, zipcode)

    Relationships:
        orders: 회원의 주문 목록 (Orders placed by this member)
    """

    __tablename__ = "member"

    # 회원 고유 식별자 — Member identifier
    id: Mapped[int] = mapped_column("member_id", Integer, primary_key=True, autoincrement=True)
    # 회원 이름 — Member name (duplicates rejected at join time, not by the DB)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # 주소 — Address composite
    address: Mapped[Address] = composite(
        mapped_column("city", String(100), nullable=True),
        mapped_column("street", String(255), nullable=True),
        mapped_column("zipcode", String(20), nullable=True),
    )

    # 관계 — Relationships
    orders = relationship("Order", back_populates="member")
