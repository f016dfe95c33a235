"""주문 애그리거트 로더 테스트.

Order aggregate loader tests. Every policy must return the same
aggregates for the same filter and window; only the number of SQL
statements and rows received may differ. Each load runs in a fresh
session so the identity map never hides a query.
"""

import logging

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.models import OrderStatus
from app.schemas.order import FetchPolicy, OrderSearch
from app.services.order_loader import LoadResult, order_aggregate_loader
from app.utils.exceptions import BadRequestError
from tests.conftest import ShopData


async def _load(
    session_factory: async_sessionmaker[AsyncSession],
    policy: FetchPolicy,
    search: OrderSearch | None = None,
    offset: int = 0,
    limit: int | None = None,
) -> LoadResult:
    async with session_factory() as session:
        return await order_aggregate_loader.load(session, search, policy, offset, limit)


async def _load_all(session_factory, search=None, offset=0, limit=None) -> dict[FetchPolicy, LoadResult]:
    return {
        policy: await _load(session_factory, policy, search, offset, limit)
        for policy in FetchPolicy
    }


SEARCHES = [
    OrderSearch(),
    OrderSearch(status=OrderStatus.ORDER),
    OrderSearch(status=OrderStatus.CANCEL),
    OrderSearch(member_name="user"),
    OrderSearch(member_name="userC"),
    OrderSearch(member_name="%"),
    OrderSearch(status=OrderStatus.CANCEL, member_name="userA"),
]

WINDOWS = [(0, None), (0, 2), (1, 2), (2, 10), (4, 1), (10, 5), (0, 0)]


class TestPolicyEquivalence:
    """전략별 결과 동일성 테스트."""

    @pytest.mark.parametrize("search", SEARCHES)
    async def test_same_result_for_every_filter(self, session_factory, shop: ShopData, search):
        results = await _load_all(session_factory, search)
        expected = results[FetchPolicy.DTO_BATCH].orders
        for policy, result in results.items():
            assert result.policy is policy
            assert result.orders == expected, policy

    @pytest.mark.parametrize("offset,limit", WINDOWS)
    async def test_same_result_for_every_window(self, session_factory, shop: ShopData, offset, limit):
        results = await _load_all(session_factory, offset=offset, limit=limit)
        expected = results[FetchPolicy.LAZY].orders
        for policy, result in results.items():
            assert result.orders == expected, policy

    async def test_normalized_shape(self, session_factory, shop: ShopData):
        """주문은 id 순, 주문상품은 주문상품 id 순."""
        result = await _load(session_factory, FetchPolicy.JOIN_FETCH)
        assert [o.order_id for o in result.orders] == [
            shop.order_a, shop.order_b, shop.cancelled, shop.empty, shop.percent
        ]
        order_a = result.orders[0]
        assert order_a.name == "userA"
        assert order_a.address.city == "서울"
        assert [(i.item_name, i.order_price, i.count) for i in order_a.order_items] == [
            ("JPA1 BOOK", 10000, 1),
            ("JPA2 BOOK", 20000, 2),
        ]
        assert result.orders[3].order_items == []
        assert result.orders[2].status == OrderStatus.CANCEL

    async def test_window_slices_orders_not_rows(self, session_factory, shop: ShopData):
        """페이지는 행이 아닌 주문 단위로 잘림."""
        for policy in FetchPolicy:
            result = await _load(session_factory, policy, offset=1, limit=1)
            assert [o.order_id for o in result.orders] == [shop.order_b]
            assert len(result.orders[0].order_items) == 2


class TestStatementCount:
    """실행 SQL 수 테스트."""

    async def test_statement_counts(self, session_factory, seeded: ShopData):
        results = await _load_all(session_factory)
        counts = {policy: result.statement_count for policy, result in results.items()}

        assert counts[FetchPolicy.JOIN_FETCH] == 1
        assert counts[FetchPolicy.DTO_FLAT] == 1
        assert counts[FetchPolicy.DTO_BATCH] == 2
        assert counts[FetchPolicy.BATCH_FETCH] == 2
        assert counts[FetchPolicy.LAZY] > max(
            counts[p] for p in FetchPolicy if p is not FetchPolicy.LAZY
        )

    async def test_batched_count_does_not_grow_with_orders(self, session_factory, shop: ShopData):
        """주문 수가 늘어도 배치 전략의 쿼리 수는 그대로."""
        results = await _load_all(session_factory)
        assert results[FetchPolicy.DTO_BATCH].statement_count == 2
        assert results[FetchPolicy.BATCH_FETCH].statement_count == 2
        assert results[FetchPolicy.LAZY].statement_count > 1 + len(results[FetchPolicy.LAZY].orders)

    async def test_row_counts(self, session_factory, shop: ShopData):
        """조인 전략은 주문상품 수만큼 중복된 행을 받음."""
        results = await _load_all(session_factory)
        assert results[FetchPolicy.JOIN_FETCH].row_count == 7
        assert results[FetchPolicy.DTO_FLAT].row_count == 7
        # 주문 5행 + 주문상품 6행
        assert results[FetchPolicy.DTO_BATCH].row_count == 11
        assert results[FetchPolicy.BATCH_FETCH].row_count == 11

    async def test_empty_result_skips_child_query(self, session_factory, seeded: ShopData):
        results = await _load_all(session_factory, OrderSearch(member_name="nobody"))
        for policy, result in results.items():
            assert result.orders == []
            assert result.statement_count == 1, policy
            assert result.row_count == 0


class TestWindowRules:
    """페이지 구간 규칙 테스트."""

    async def test_negative_offset(self, db: AsyncSession):
        with pytest.raises(BadRequestError):
            await order_aggregate_loader.load(db, offset=-1)

    async def test_negative_limit(self, db: AsyncSession):
        with pytest.raises(BadRequestError):
            await order_aggregate_loader.load(db, limit=-5)

    async def test_limit_never_exceeds_cap(self, session_factory, shop: ShopData, monkeypatch):
        monkeypatch.setattr(settings, "ORDER_SEARCH_MAX_RESULTS", 2)
        for policy in FetchPolicy:
            result = await _load(session_factory, policy, limit=50)
            assert [o.order_id for o in result.orders] == [shop.order_a, shop.order_b], policy

    async def test_policy_accepts_string(self, session_factory, seeded: ShopData):
        result = await _load(session_factory, "dto_flat")
        assert result.policy is FetchPolicy.DTO_FLAT
        assert len(result.orders) == 2

    async def test_in_memory_paging_warns(self, session_factory, seeded: ShopData, caplog):
        with caplog.at_level(logging.WARNING, logger="app.services.order_loader"):
            await _load(session_factory, FetchPolicy.JOIN_FETCH, offset=1)
            await _load(session_factory, FetchPolicy.DTO_FLAT, limit=1)
            await _load(session_factory, FetchPolicy.DTO_BATCH, offset=1)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 2

    async def test_no_warning_without_window(self, session_factory, seeded: ShopData, caplog):
        with caplog.at_level(logging.WARNING, logger="app.services.order_loader"):
            await _load(session_factory, FetchPolicy.JOIN_FETCH)
        assert not [r for r in caplog.records if r.levelno == logging.WARNING]
