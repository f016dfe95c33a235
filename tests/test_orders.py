"""주문 API 테스트.

Order API tests — place, cancel, detail, and the aggregate listing under
each loading policy.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient

from app.config import settings
from app.schemas.order import FetchPolicy
from tests.conftest import ShopData

URL = "/api/v1/orders"


@pytest_asyncio.fixture
async def member_and_item(client: AsyncClient) -> tuple[int, int]:
    member = (await client.post("/api/v1/members", json={
        "name": "kim",
        "address": {"city": "서울", "street": "강가", "zipcode": "123-123"},
    })).json()
    item = (await client.post("/api/v1/items", json={
        "name": "시골 JPA", "price": 10000, "stock_quantity": 10,
    })).json()
    return member["id"], item["id"]


class TestOrderCreate:
    """주문 생성 테스트."""

    async def test_order(self, client: AsyncClient, member_and_item):
        member_id, item_id = member_and_item
        res = await client.post(URL, json={"member_id": member_id, "item_id": item_id, "count": 2})
        assert res.status_code == 201
        data = res.json()
        assert data["status"] == "ORDER"
        assert data["delivery_status"] == "READY"
        assert data["member_name"] == "kim"
        assert data["address"]["city"] == "서울"
        assert data["total_price"] == 20000
        assert data["order_items"] == [
            {"item_id": item_id, "item_name": "시골 JPA", "order_price": 10000, "count": 2}
        ]

        item = (await client.get(f"/api/v1/items/{item_id}")).json()
        assert item["stock_quantity"] == 8

    async def test_order_not_enough_stock(self, client: AsyncClient, member_and_item):
        """재고 수량 초과 주문 시 400, 재고 변화 없음."""
        member_id, item_id = member_and_item
        res = await client.post(URL, json={"member_id": member_id, "item_id": item_id, "count": 11})
        assert res.status_code == 400
        assert res.json()["detail"] == "need more stock"

        item = (await client.get(f"/api/v1/items/{item_id}")).json()
        assert item["stock_quantity"] == 10

    async def test_order_unknown_member(self, client: AsyncClient, member_and_item):
        _, item_id = member_and_item
        res = await client.post(URL, json={"member_id": 9999, "item_id": item_id, "count": 1})
        assert res.status_code == 404

    async def test_order_unknown_item(self, client: AsyncClient, member_and_item):
        member_id, _ = member_and_item
        res = await client.post(URL, json={"member_id": member_id, "item_id": 9999, "count": 1})
        assert res.status_code == 404

    async def test_order_zero_count(self, client: AsyncClient, member_and_item):
        member_id, item_id = member_and_item
        res = await client.post(URL, json={"member_id": member_id, "item_id": item_id, "count": 0})
        assert res.status_code == 422


class TestOrderCancel:
    """주문 취소 테스트."""

    async def test_cancel(self, client: AsyncClient, member_and_item):
        member_id, item_id = member_and_item
        order = (await client.post(URL, json={"member_id": member_id, "item_id": item_id, "count": 2})).json()

        res = await client.post(f"{URL}/{order['id']}/cancel")
        assert res.status_code == 200
        assert res.json()["status"] == "CANCEL"

        item = (await client.get(f"/api/v1/items/{item_id}")).json()
        assert item["stock_quantity"] == 10

    async def test_cancel_twice(self, client: AsyncClient, member_and_item):
        member_id, item_id = member_and_item
        order = (await client.post(URL, json={"member_id": member_id, "item_id": item_id, "count": 1})).json()
        await client.post(f"{URL}/{order['id']}/cancel")

        res = await client.post(f"{URL}/{order['id']}/cancel")
        assert res.status_code == 400

    async def test_cancel_unknown_order(self, client: AsyncClient):
        res = await client.post(f"{URL}/9999/cancel")
        assert res.status_code == 404


class TestOrderDetail:
    """주문 상세 조회 테스트."""

    async def test_get_order(self, client: AsyncClient, seeded: ShopData):
        res = await client.get(f"{URL}/{seeded.order_b}")
        assert res.status_code == 200
        data = res.json()
        assert data["member_name"] == "userB"
        assert [(i["item_name"], i["count"]) for i in data["order_items"]] == [
            ("SPRING1 BOOK", 3), ("SPRING2 BOOK", 4)
        ]
        assert data["total_price"] == 20000 * 3 + 40000 * 4

    async def test_get_unknown_order(self, client: AsyncClient):
        res = await client.get(f"{URL}/9999")
        assert res.status_code == 404


class TestOrderList:
    """로딩 전략별 주문 목록 테스트."""

    @pytest.mark.parametrize("policy", [p.value for p in FetchPolicy])
    async def test_list_orders(self, client: AsyncClient, seeded: ShopData, policy):
        res = await client.get(URL, params={"policy": policy})
        assert res.status_code == 200
        data = res.json()
        assert data["policy"] == policy
        assert data["statement_count"] >= 1
        assert [o["name"] for o in data["orders"]] == ["userA", "userB"]
        assert [i["item_name"] for i in data["orders"][0]["order_items"]] == ["JPA1 BOOK", "JPA2 BOOK"]

    async def test_default_policy(self, client: AsyncClient, seeded: ShopData):
        data = (await client.get(URL)).json()
        assert data["policy"] == "dto_batch"
        assert data["statement_count"] == 2

    async def test_list_filtered(self, client: AsyncClient, shop: ShopData):
        res = await client.get(URL, params={"status": "CANCEL"})
        assert [o["order_id"] for o in res.json()["orders"]] == [shop.cancelled]

        res = await client.get(URL, params={"member_name": "userA", "policy": "join_fetch"})
        assert [o["order_id"] for o in res.json()["orders"]] == [shop.order_a]

    async def test_list_window(self, client: AsyncClient, shop: ShopData):
        res = await client.get(URL, params={"offset": 1, "limit": 2, "policy": "batch_fetch"})
        assert [o["order_id"] for o in res.json()["orders"]] == [shop.order_b, shop.cancelled]

    async def test_list_invalid_policy(self, client: AsyncClient):
        res = await client.get(URL, params={"policy": "eager"})
        assert res.status_code == 422

    async def test_list_negative_offset(self, client: AsyncClient):
        res = await client.get(URL, params={"offset": -1})
        assert res.status_code == 422

    async def test_flat_rows(self, client: AsyncClient, seeded: ShopData):
        res = await client.get(f"{URL}/flat")
        assert res.status_code == 200
        rows = res.json()
        assert len(rows) == 4
        assert [r["order_id"] for r in rows] == [seeded.order_a] * 2 + [seeded.order_b] * 2
        assert rows[0]["item_name"] == "JPA1 BOOK"

    async def test_flat_rows_window_counts_orders(self, client: AsyncClient, shop: ShopData):
        """평면 행 페이지는 행이 아닌 주문 단위."""
        res = await client.get(f"{URL}/flat", params={"offset": 1, "limit": 2})
        assert res.status_code == 200
        order_ids = [r["order_id"] for r in res.json()]
        assert order_ids == [shop.order_b, shop.order_b, shop.cancelled]

    async def test_flat_rows_capped(self, client: AsyncClient, shop: ShopData, monkeypatch):
        """평면 행도 ORDER_SEARCH_MAX_RESULTS 건의 주문까지만."""
        monkeypatch.setattr(settings, "ORDER_SEARCH_MAX_RESULTS", 2)
        res = await client.get(f"{URL}/flat", params={"limit": 50})
        order_ids = [r["order_id"] for r in res.json()]
        assert sorted(set(order_ids)) == [shop.order_a, shop.order_b]
        assert len(order_ids) == 4

        res = await client.get(f"{URL}/flat")
        assert len({r["order_id"] for r in res.json()}) == 2

    async def test_flat_rows_negative_limit(self, client: AsyncClient):
        res = await client.get(f"{URL}/flat", params={"limit": -1})
        assert res.status_code == 422
