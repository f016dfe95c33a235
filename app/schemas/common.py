"""공통 Pydantic 요청/응답 스키마 정의.

Common Pydantic request/response schema definitions shared by several
API domains: the address value and the pagination wrapper.
"""

from typing import Any

from pydantic import BaseModel


class AddressSchema(BaseModel):
    """주소 스키마 — Address value (city, street, zipcode).

    Attributes:
        city: 도시 (City)
        street: 거리 (Street)
        zipcode: 우편번호 (Zip code)
    """

    city: str | None = None  # 도시 (City)
    street: str | None = None  # 거리 (Street)
    zipcode: str | None = None  # 우편번호 (Zip code)


class PaginatedResponse(BaseModel):
    """페이지네이션 응답 스키마.

    Paginated response wrapper schema.
    Wraps a list of items with pagination metadata.

    Attributes:
        items: 항목 목록 (List of result items)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
    """

    items: list[Any]  # 결과 항목 목록 (List of items for the current page)
    total: int  # 전체 항목 수 (Total item count)
    page: int  # 현재 페이지 — 1부터 시작 (Current page, 1-indexed)
    per_page: int  # 페이지당 항목 수 (Items per page)

