"""회원 레포지토리 — 회원 CRUD 및 동적 검색 쿼리.

Member Repository — CRUD and dynamic search queries for members.
Lookups come in two flavours, a plain ORM/textual query and the same query
through QueryFactory. Search builds a conjunction of only the filters that
are present and projects rows into MemberTeamDto.
"""

from typing import Any

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.models.member import Member, Team
from app.querydsl import PredicateBuilder, Projection, Query, QueryFactory
from app.repositories.base import BaseRepository
from app.schemas.member import MemberSearchCond, MemberTeamDto
from app.utils.pagination import Page, PageRequest, get_page


# ---------------------------------------------------------------------------
# 검색 조건 — 값이 없으면 None을 반환하여 where()에서 무시됨
# Search predicates — each returns None when its filter is absent
# ---------------------------------------------------------------------------
def _has_text(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def username_eq(username: str | None) -> ColumnElement[bool] | None:
    return Member.username == username if _has_text(username) else None


def team_name_eq(team_name: str | None) -> ColumnElement[bool] | None:
    return Team.name == team_name if _has_text(team_name) else None


def age_goe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age >= age if age is not None else None


def age_loe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age <= age if age is not None else None


def member_team_projection() -> Projection[MemberTeamDto]:
    """MemberTeamDto 생성자 프로젝션 (member id, username, age, team id, team name)."""
    return MemberTeamDto.projection(Member.id, Member.username, Member.age, Team.id, Team.name)


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    Search queries left-join Team, so members without a team are only
    dropped when a team filter is actually given.
    """

    def __init__(self) -> None:
        """MemberRepository를 초기화합니다.

        Initialize the MemberRepository with the Member model.
        """
        super().__init__(Member)

    async def find_by_id(self, db: AsyncSession, member_id: int) -> Member | None:
        """ID로 회원을 조회합니다 (None when absent)."""
        return await self.get_by_id(db, member_id)

    async def find_all(self, db: AsyncSession) -> list[Member]:
        """전체 회원 — plain ORM select ordered by id."""
        result = await db.execute(select(Member).order_by(Member.id))
        return list(result.scalars().all())

    async def find_all_querydsl(self, db: AsyncSession) -> list[Member]:
        """전체 회원 — the same query through QueryFactory."""
        return await QueryFactory(db).select_from(Member).order_by(Member.id).fetch()

    async def find_by_username(self, db: AsyncSession, username: str) -> list[Member]:
        """이름으로 회원을 조회합니다.

        Textual SQL with a named bind parameter, mapped back onto Member.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 회원 이름 (Exact username)

        Returns:
            list[Member]: 일치하는 회원 목록 (Matching members)
        """
        statement = text(
            "SELECT members.id, members.username, members.age, members.team_id "
            "FROM members WHERE members.username = :username ORDER BY members.id"
        ).bindparams(username=username)
        result = await db.execute(select(Member).from_statement(statement))
        return list(result.scalars().all())

    async def find_by_username_querydsl(self, db: AsyncSession, username: str) -> list[Member]:
        """이름으로 회원을 조회합니다 — QueryFactory version of find_by_username."""
        return await (
            QueryFactory(db)
            .select_from(Member)
            .where(Member.username == username)
            .order_by(Member.id)
            .fetch()
        )

    async def find_all_by(self, db: AsyncSession, predicate: Any) -> list[Member]:
        """임의의 조건식으로 회원을 조회합니다.

        Members matching an arbitrary boolean expression (or a
        PredicateBuilder); None matches every member.
        """
        return await QueryFactory(db).select_from(Member).where(predicate).order_by(Member.id).fetch()

    # ------------------------------------------------------------------
    # 동적 검색 — Dynamic search
    # ------------------------------------------------------------------
    def _search_query(self, db: AsyncSession, *predicates: Any) -> Query[MemberTeamDto]:
        """회원 + 팀 외부 조인 검색 쿼리 (None predicates are skipped)."""
        return (
            QueryFactory(db)
            .select(member_team_projection())
            .from_(Member)
            .left_join(Member.team)
            .where(*predicates)
            .order_by(Member.id)
        )

    def _cond_query(self, db: AsyncSession, cond: MemberSearchCond) -> Query[MemberTeamDto]:
        return self._search_query(
            db,
            username_eq(cond.username),
            team_name_eq(cond.team_name),
            age_goe(cond.age_goe),
            age_loe(cond.age_loe),
        )

    async def search_by_builder(
        self,
        db: AsyncSession,
        cond: MemberSearchCond,
    ) -> list[MemberTeamDto]:
        """조건 빌더로 회원을 검색합니다.

        Accumulate the present filters in a PredicateBuilder and project
        the rows into MemberTeamDto.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            cond: 검색 조건 (Optional filters)

        Returns:
            list[MemberTeamDto]: 검색 결과, id 순 (Results ordered by member id)
        """
        builder = PredicateBuilder()
        if _has_text(cond.username):
            builder.and_(Member.username == cond.username)
        if _has_text(cond.team_name):
            builder.and_(Team.name == cond.team_name)
        if cond.age_goe is not None:
            builder.and_(Member.age >= cond.age_goe)
        if cond.age_loe is not None:
            builder.and_(Member.age <= cond.age_loe)

        return await self._search_query(db, builder).fetch()

    async def search(
        self,
        db: AsyncSession,
        cond: MemberSearchCond,
    ) -> list[MemberTeamDto]:
        """조건 함수로 회원을 검색합니다.

        Same result as search_by_builder, written with one predicate
        function per filter; absent filters yield None and are skipped.
        No filters at all means an unfiltered scan.
        """
        return await self._cond_query(db, cond).fetch()

    async def search_page_simple(
        self,
        db: AsyncSession,
        cond: MemberSearchCond,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """검색 + 페이지네이션 — 항상 COUNT 쿼리를 실행합니다.

        Search one window and always run a separate count query over the
        same predicate.
        """
        results = await (
            self._cond_query(db, cond)
            .offset(page_request.offset)
            .limit(page_request.size)
            .fetch_results()
        )
        return Page(
            items=results.results,
            total=results.total,
            offset=page_request.offset,
            size=page_request.size,
        )

    async def search_page_complex(
        self,
        db: AsyncSession,
        cond: MemberSearchCond,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """검색 + 페이지네이션 — 필요할 때만 COUNT 쿼리를 실행합니다.

        Search one window, then resolve the total with get_page: the count
        query is skipped when the slice proves it is the last page.
        """
        query = self._cond_query(db, cond)
        content = await query.offset(page_request.offset).limit(page_request.size).fetch()
        # fetch_count는 정렬/오프셋/리밋을 제거한 같은 쿼리로 셈
        return await get_page(content, page_request, query.fetch_count)


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
