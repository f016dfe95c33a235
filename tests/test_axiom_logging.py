"""Axiom 요청 로깅 미들웨어 테스트.

Axiom request logging middleware tests. The Axiom client is replaced
with an in-memory recorder and the middleware stack is rebuilt so the
middleware picks up the configured token.
"""

from typing import Any

import pytest
from httpx import AsyncClient

from app.config import settings
from app.main import app
from app.middleware import axiom_logging
from tests.conftest import ShopData


class _RecordingClient:
    """ingest_events 호출을 기록하는 Axiom 클라이언트 대역."""

    def __init__(self, token: str) -> None:
        self.token = token
        self.events: list[tuple[str, dict[str, Any]]] = []

    def ingest_events(self, dataset: str, events: list[dict[str, Any]]) -> None:
        self.events.extend((dataset, event) for event in events)


@pytest.fixture
def axiom_events(monkeypatch) -> list[tuple[str, dict[str, Any]]]:
    """Axiom 설정을 켜고 기록된 이벤트 목록을 돌려줍니다."""
    recorder = _RecordingClient("test-token")

    monkeypatch.setattr(settings, "AXIOM_API_TOKEN", "test-token")
    monkeypatch.setattr(settings, "AXIOM_DATASET", "shop-api")
    monkeypatch.setattr(axiom_logging, "AxiomClient", lambda token: recorder)
    # 다음 요청에서 미들웨어 재생성 — Rebuild the middleware stack on the next request
    monkeypatch.setattr(app, "middleware_stack", None)
    return recorder.events


class TestAxiomLogging:
    """요청 로그 이벤트 테스트."""

    async def test_order_listing_logs_statement_count(self, client: AsyncClient, seeded: ShopData, axiom_events):
        res = await client.get("/api/v1/orders", params={"policy": "lazy"})
        assert res.status_code == 200

        [(dataset, event)] = axiom_events
        assert dataset == "shop-api"
        assert event["method"] == "GET"
        assert event["path"] == "/api/v1/orders"
        assert event["status_code"] == 200
        assert event["query_params"] == {"policy": "lazy"}
        assert event["sql_statements"] == res.json()["statement_count"]

    async def test_other_endpoints_have_no_statement_count(self, client: AsyncClient, seeded: ShopData, axiom_events):
        await client.get("/api/v1/members")
        [(_, event)] = axiom_events
        assert "sql_statements" not in event

    async def test_error_detail_logged(self, client: AsyncClient, axiom_events):
        res = await client.get("/api/v1/orders/9999")
        assert res.status_code == 404

        [(_, event)] = axiom_events
        assert event["status_code"] == 404
        assert event["error"] == "Order not found"

    async def test_health_not_logged(self, client: AsyncClient, axiom_events):
        await client.get("/health")
        assert axiom_events == []
