"""회원 서비스 — 회원 가입, 조회, 수정 비즈니스 로직.

Member Service — Business logic for joining, listing, and renaming members.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Address, Member
from app.repositories.member_repository import member_repository
from app.schemas.common import AddressSchema
from app.schemas.member import MemberCreate, MemberResponse, MemberUpdate
from app.utils.exceptions import DuplicateError, NotFoundError


class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member business logic.
    """

    def _to_response(self, member: Member) -> MemberResponse:
        """회원 모델을 응답 스키마로 변환합니다.

        Convert a Member model instance to a MemberResponse schema.
        """
        address: Address | None = member.address
        return MemberResponse(
            id=member.id,
            name=member.name,
            address=AddressSchema(
                city=address.city if address else None,
                street=address.street if address else None,
                zipcode=address.zipcode if address else None,
            ),
        )

    async def _validate_duplicate_member(self, db: AsyncSession, name: str) -> None:
        """같은 이름의 회원이 있으면 가입을 거부합니다.

        Reject a join when a member with the same name already exists.

        Raises:
            DuplicateError: 이미 존재하는 회원 (Member name already taken)
        """
        if await member_repository.get_by_name(db, name):
            raise DuplicateError("이미 존재하는 회원입니다. (Member already exists)")

    async def join(self, db: AsyncSession, data: MemberCreate) -> MemberResponse:
        """회원 가입.

        Join a new member after the duplicate-name check.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 가입 요청 데이터 (Join request)

        Returns:
            MemberResponse: 가입된 회원 (The new member)

        Raises:
            DuplicateError: 이름 중복 (Duplicate member name)
        """
        await self._validate_duplicate_member(db, data.name)

        address: AddressSchema = data.address or AddressSchema()
        member: Member = Member(
            name=data.name,
            address=Address(city=address.city, street=address.street, zipcode=address.zipcode),
        )
        member = await member_repository.save(db, member)
        return self._to_response(member)

    async def find_members(self, db: AsyncSession) -> list[MemberResponse]:
        """전체 회원 조회 (All members, by id)."""
        members = await member_repository.get_all(db)
        return [self._to_response(m) for m in members]

    async def find_one(self, db: AsyncSession, member_id: int) -> MemberResponse:
        """회원 단건 조회.

        Raises:
            NotFoundError: 회원 없음 (Member not found)
        """
        member: Member | None = await member_repository.get_by_id(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")
        return self._to_response(member)

    async def update(self, db: AsyncSession, member_id: int, data: MemberUpdate) -> MemberResponse:
        """회원 이름을 변경합니다 (변경 감지로 반영).

        Rename a member; the change is flushed through dirty checking.

        Raises:
            NotFoundError: 회원 없음 (Member not found)
        """
        member: Member | None = await member_repository.update(db, member_id, {"name": data.name})
        if member is None:
            raise NotFoundError("Member not found")
        return self._to_response(member)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
