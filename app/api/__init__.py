"""API 라우터 패키지 — 모든 쇼핑몰 엔드포인트 통합.

API Router package — Aggregates the shop endpoints into a single router
mounted under /api/v1.

Included routers:
    - members: 회원 (Members)
    - items: 상품 (Items)
    - orders: 주문 생성/취소/조회 (Orders, aggregate listing by policy)
    - simple_orders: 주문 요약 (to-one only order summaries)
"""

from fastapi import APIRouter

from app.api.items import router as items_router
from app.api.members import router as members_router
from app.api.orders import router as orders_router
from app.api.simple_orders import router as simple_orders_router

api_router: APIRouter = APIRouter()

api_router.include_router(members_router, prefix="/members", tags=["Members"])
api_router.include_router(items_router, prefix="/items", tags=["Items"])
api_router.include_router(orders_router, prefix="/orders", tags=["Orders"])
# to-one 관계만 조회 — Member and delivery only, no order lines
api_router.include_router(simple_orders_router, prefix="/simple-orders", tags=["Simple Orders"])
