"""초기 데이터 시드 스크립트 — 샘플 회원, 도서, 주문 생성.

Seed script — Creates sample members, books, and orders so the order
listing endpoints have something to show.

Usage:
    python -m app.seed

Creates:
    - userA (서울): JPA1 BOOK x1, JPA2 BOOK x2 주문 1건 (one order, two lines)
    - userB (진주): SPRING1 BOOK x3, SPRING2 BOOK x4 주문 1건 (one order, two lines)
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base, async_session, engine
from app.models import Address, Delivery, Item, Member, Order, OrderItem

logger = logging.getLogger(__name__)


def _book(name: str, price: int, stock_quantity: int) -> Item:
    return Item(name=name, price=price, stock_quantity=stock_quantity)


def _order(member: Member, *lines: tuple[Item, int]) -> Order:
    """회원 주소로 배송하는 주문을 만듭니다 (재고 차감 포함).

    Build an order shipped to the member's address; creating each line
    removes the ordered quantity from stock.
    """
    address: Address = member.address
    delivery: Delivery = Delivery(
        address=Address(city=address.city, street=address.street, zipcode=address.zipcode)
    )
    order_items = [OrderItem.create(item, item.price, count) for item, count in lines]
    return Order.create(member, delivery, *order_items)


async def seed_data(db: AsyncSession) -> bool:
    """샘플 데이터를 추가합니다. 이미 회원이 있으면 아무것도 하지 않습니다.

    Insert the sample data into ``db`` and flush. Returns False without
    touching anything when any member already exists.
    """
    result = await db.execute(select(Member.id).limit(1))
    if result.scalar_one_or_none() is not None:
        return False

    # userA — JPA 도서 2권 주문
    member_a: Member = Member(name="userA", address=Address(city="서울", street="1", zipcode="1111"))
    jpa1 = _book("JPA1 BOOK", 10000, 100)
    jpa2 = _book("JPA2 BOOK", 20000, 100)
    db.add_all([member_a, jpa1, jpa2])
    db.add(_order(member_a, (jpa1, 1), (jpa2, 2)))

    # userB — SPRING 도서 2권 주문
    member_b: Member = Member(name="userB", address=Address(city="진주", street="2", zipcode="2222"))
    spring1 = _book("SPRING1 BOOK", 20000, 200)
    spring2 = _book("SPRING2 BOOK", 40000, 300)
    db.add_all([member_b, spring1, spring2])
    db.add(_order(member_b, (spring1, 3), (spring2, 4)))

    await db.flush()
    return True


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Create the tables if they don't exist, then insert the sample data.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        if not await seed_data(db):
            logger.info("Already seeded. Skipping.")
            return
        await db.commit()
        logger.info("Seeded: userA and userB with one order each")

    await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    asyncio.run(seed())
