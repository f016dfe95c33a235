"""주문 요약 API 테스트.

Simple order API tests — to-one only summaries, entity and dto modes.
"""

import pytest
from httpx import AsyncClient

from tests.conftest import ShopData

URL = "/api/v1/simple-orders"


class TestSimpleOrders:
    """주문 요약 조회 테스트."""

    @pytest.mark.parametrize("mode", ["entity", "dto"])
    async def test_list(self, client: AsyncClient, seeded: ShopData, mode):
        res = await client.get(URL, params={"mode": mode})
        assert res.status_code == 200
        data = res.json()
        assert [(o["order_id"], o["name"]) for o in data] == [
            (seeded.order_a, "userA"),
            (seeded.order_b, "userB"),
        ]
        assert data[1]["address"] == {"city": "진주", "street": "2", "zipcode": "2222"}
        assert "order_items" not in data[0]

    async def test_modes_agree(self, client: AsyncClient, shop: ShopData):
        entity = (await client.get(URL, params={"mode": "entity", "offset": 1, "limit": 3})).json()
        dto = (await client.get(URL, params={"mode": "dto", "offset": 1, "limit": 3})).json()
        assert [o["order_id"] for o in entity] == [shop.order_b, shop.cancelled, shop.empty]
        assert [o["order_id"] for o in dto] == [o["order_id"] for o in entity]
        assert [o["status"] for o in dto] == ["ORDER", "CANCEL", "ORDER"]

    async def test_unknown_mode(self, client: AsyncClient):
        res = await client.get(URL, params={"mode": "raw"})
        assert res.status_code == 422


async def test_health(client: AsyncClient):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}
