"""회원 라우터 — 회원 가입, 목록, 단건 조회, 이름 변경.

Member Router — Join, list, read, and rename members.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.member import MemberCreate, MemberResponse, MemberUpdate
from app.services.member_service import member_service

router: APIRouter = APIRouter()


@router.post("", response_model=MemberResponse, status_code=201)
async def join_member(
    data: MemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원 가입. 같은 이름이 있으면 409.

    Join a new member. A duplicate name is rejected with 409.
    """
    result: MemberResponse = await member_service.join(db, data)
    await db.commit()
    return result


@router.get("", response_model=list[MemberResponse])
async def list_members(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MemberResponse]:
    """회원 목록 (All members)."""
    return await member_service.find_members(db)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    return await member_service.find_one(db, member_id)


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: int,
    data: MemberUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원 이름을 변경합니다 (Rename a member)."""
    result: MemberResponse = await member_service.update(db, member_id, data)
    await db.commit()
    return result
