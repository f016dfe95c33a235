"""회원 관련 Pydantic 요청/응답 스키마 정의.

Member Pydantic request/response schema definitions.
"""

from pydantic import BaseModel, Field

from app.schemas.common import AddressSchema


class MemberCreate(BaseModel):
    """회원 가입 요청 스키마.

    Member join request schema.

    Attributes:
        name: 회원 이름 (Member name, required and non-empty)
        address: 주소 (Address, optional)
    """

    name: str = Field(..., min_length=1)  # 회원 이름 (Member name)
    address: AddressSchema | None = None  # 주소 (Address, optional)


class MemberUpdate(BaseModel):
    """회원 수정 요청 스키마 — 이름 변경.

    Member update request schema (rename).
    """

    name: str = Field(..., min_length=1)  # 변경할 이름 (New name)


class MemberResponse(BaseModel):
    """회원 응답 스키마.

    Member response schema.

    Attributes:
        id: 회원 ID (Member identifier)
        name: 회원 이름 (Member name)
        address: 주소 (Address)
    """

    id: int  # 회원 ID (Member identifier)
    name: str  # 회원 이름 (Member name)
    address: AddressSchema  # 주소 (Address)
