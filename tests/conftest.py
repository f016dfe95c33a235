"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Every test gets a fresh schema on its own engine; StaticPool keeps the
single in-memory database alive across sessions.
"""

from collections.abc import AsyncGenerator
from dataclasses import dataclass

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Address, Delivery, Item, Member, Order, OrderItem
from app.seed import seed_data

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 만듭니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """새 세션(빈 identity map)이 필요한 테스트용 팩토리."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@dataclass
class ShopData:
    """픽스처가 만든 주문 ID 모음 (Order ids created by the fixtures)."""

    order_a: int
    order_b: int
    cancelled: int = 0
    empty: int = 0
    percent: int = 0


async def _order_ids(db: AsyncSession) -> list[int]:
    result = await db.execute(select(Order.id).order_by(Order.id))
    return list(result.scalars().all())


@pytest_asyncio.fixture
async def seeded(db: AsyncSession) -> ShopData:
    """샘플 데이터: userA, userB가 각각 도서 2권을 주문."""
    await seed_data(db)
    await db.commit()
    order_a, order_b = await _order_ids(db)
    return ShopData(order_a=order_a, order_b=order_b)


@pytest_asyncio.fixture
async def shop(db: AsyncSession, seeded: ShopData) -> ShopData:
    """샘플 데이터에 검색/경계 케이스용 주문을 더합니다.

    Adds to the sample data:
        - userC: 취소된 주문 1건 (a cancelled order with one line)
        - userC: 주문상품이 없는 주문 1건 (an order without lines)
        - 50%_off: LIKE 특수문자가 들어간 이름의 회원 주문 1건
    """
    book = Item(name="MSA BOOK", price=30000, stock_quantity=10)
    member_c = Member(name="userC", address=Address(city="부산", street="3", zipcode="3333"))
    member_odd = Member(name="50%_off", address=Address(city="대구", street="4", zipcode="4444"))
    db.add_all([book, member_c, member_odd])

    def delivery_for(member: Member) -> Delivery:
        address = member.address
        return Delivery(address=Address(city=address.city, street=address.street, zipcode=address.zipcode))

    cancelled = Order.create(member_c, delivery_for(member_c), OrderItem.create(book, book.price, 2))
    db.add(cancelled)
    await db.flush()
    cancelled.cancel()

    db.add(Order.create(member_c, delivery_for(member_c)))
    db.add(Order.create(member_odd, delivery_for(member_odd), OrderItem.create(book, book.price, 1)))
    await db.commit()

    ids = await _order_ids(db)
    seeded.cancelled, seeded.empty, seeded.percent = ids[2], ids[3], ids[4]
    return seeded
