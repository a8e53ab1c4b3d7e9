"""회원 서비스 — 회원 조회 및 검색 비즈니스 로직.

Member Service — Business logic for member lookup and search.
Converts entities to responses and turns a missing member into
NotFoundError; search calls are forwarded to the repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member
from app.repositories.member_repository import member_repository
from app.schemas.member import MemberResponse, MemberSearchCond, MemberTeamDto
from app.utils.exceptions import NotFoundError
from app.utils.pagination import Page, PageRequest


class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member lookups and searches.
    """

    def _to_response(self, member: Member) -> MemberResponse:
        """회원 모델을 응답 스키마로 변환합니다.

        Convert a Member model instance to a MemberResponse schema.

        Args:
            member: 회원 모델 (Member model instance)

        Returns:
            MemberResponse: 회원 응답 (Member response)
        """
        return MemberResponse(
            id=member.id,
            username=member.username,
            age=member.age,
            team_id=member.team_id,
        )

    async def get_member(
        self,
        db: AsyncSession,
        member_id: int,
    ) -> MemberResponse:
        """회원 정보를 조회합니다.

        Retrieve a single member.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            member_id: 회원 ID (Member identifier)

        Returns:
            MemberResponse: 회원 응답 (Member response)

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        member: Member | None = await member_repository.find_by_id(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")
        return self._to_response(member)

    async def search_members(
        self,
        db: AsyncSession,
        cond: MemberSearchCond,
    ) -> list[MemberTeamDto]:
        """조건에 맞는 회원 전체를 검색합니다 (Unpaged; callers should page large scans)."""
        return await member_repository.search(db, cond)

    async def search_members_page(
        self,
        db: AsyncSession,
        cond: MemberSearchCond,
        page_request: PageRequest,
        lazy_count: bool = False,
    ) -> Page[MemberTeamDto]:
        """조건에 맞는 회원을 페이지 단위로 검색합니다.

        Paged search. ``lazy_count`` selects the strategy that skips the
        count query when the slice proves it is the last page.
        """
        if lazy_count:
            return await member_repository.search_page_complex(db, cond, page_request)
        return await member_repository.search_page_simple(db, cond, page_request)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
