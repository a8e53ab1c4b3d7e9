"""회원/팀 레포지토리 테스트.

Member and Team repository tests — basic CRUD lookups, optional-predicate
search, and both pagination strategies.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Member, Team
from app.querydsl import PredicateBuilder
from app.repositories.member_repository import member_repository
from app.repositories.team_repository import team_repository
from app.schemas.member import MemberSearchCond
from app.utils import pagination
from app.utils.pagination import PageRequest


class TestBasic:
    """기본 조회 테스트."""

    async def test_save_and_find(self, db: AsyncSession):
        """저장 후 ID/전체/이름 조회."""
        member1 = await member_repository.save(db, Member(username="member1", age=10))

        assert await member_repository.find_by_id(db, member1.id) is member1
        assert await member_repository.find_all(db) == [member1]
        assert await member_repository.find_all_querydsl(db) == [member1]
        assert await member_repository.find_by_username(db, "member1") == [member1]
        assert await member_repository.find_by_username_querydsl(db, "member1") == [member1]

    async def test_querydsl_lookups_return_entities(self, db: AsyncSession, members):
        """QueryFactory 조회도 Member 엔티티를 반환."""
        all_members = await member_repository.find_all_querydsl(db)
        assert all(isinstance(m, Member) for m in all_members)
        assert [m.username for m in all_members] == ["member1", "member2", "member3", "member4"]

        by_name = await member_repository.find_by_username_querydsl(db, "member3")
        assert by_name == [members["member3"]]

        matched = await member_repository.find_all_by(db, Member.username == "member1")
        assert [m.username for m in matched] == ["member1"]

    async def test_find_by_id_missing(self, db: AsyncSession):
        """없는 ID는 None."""
        assert await member_repository.find_by_id(db, 9999) is None

    async def test_find_by_username_no_match(self, db: AsyncSession, members):
        """일치하는 이름이 없으면 빈 리스트."""
        assert await member_repository.find_by_username(db, "nobody") == []

    async def test_find_all_by_predicate(self, db: AsyncSession, members):
        """임의 조건식 실행."""
        result = await member_repository.find_all_by(
            db, Member.age.between(10, 40) & (Member.username == "member1")
        )
        assert [m.username for m in result] == ["member1"]

    async def test_find_all_by_builder(self, db: AsyncSession, members):
        """PredicateBuilder도 받음, 비어 있으면 전체."""
        assert len(await member_repository.find_all_by(db, PredicateBuilder())) == 4
        assert len(await member_repository.find_all_by(db, None)) == 4

    async def test_base_create_and_exists(self, db: AsyncSession):
        """dict로 생성, exists 확인."""
        team = await team_repository.create(db, {"name": "teamC"})
        assert team.id is not None
        assert await team_repository.exists(db, {"name": "teamC"}) is True
        assert await team_repository.exists(db, {"name": "teamZ"}) is False

    async def test_base_get_all_filters(self, db: AsyncSession, members):
        """None 필터는 무시."""
        result = await member_repository.get_all(db, filters={"age": 20, "username": None})
        assert [m.username for m in result] == ["member2"]

    async def test_base_get_paginated(self, db: AsyncSession, members):
        """엔티티 페이지네이션."""
        items, total = await member_repository.get_paginated(
            db, select(Member).order_by(Member.id), PageRequest(offset=2, size=10)
        )
        assert total == 4
        assert [m.username for m in items] == ["member3", "member4"]

    async def test_team_get_by_name(self, db: AsyncSession, teams):
        """이름으로 팀 조회."""
        assert (await team_repository.get_by_name(db, "teamB")).id == teams["teamB"].id
        assert await team_repository.get_by_name(db, "teamZ") is None

    async def test_change_team(self, db: AsyncSession, teams):
        """팀 변경 후 저장."""
        member = Member(username="mover", age=33)
        member.change_team(teams["teamA"])
        await member_repository.save(db, member)
        assert member.team_id == teams["teamA"].id


class TestSearch:
    """동적 검색 테스트."""

    @pytest.fixture(params=["search", "search_by_builder"])
    def search(self, request):
        """두 구현이 같은 결과를 내야 함."""
        return getattr(member_repository, request.param)

    async def test_search_scenario(self, db: AsyncSession, members, search):
        """나이 35~55, teamB → member4."""
        cond = MemberSearchCond(age_goe=35, age_loe=55, team_name="teamB")
        result = await search(db, cond)
        assert [dto.username for dto in result] == ["member4"]
        assert result[0].team_name == "teamB"
        assert result[0].member_id == members["member4"].id

    async def test_search_team_and_age_loe(self, db: AsyncSession, members, search):
        """teamA, 15세 이하 → member1."""
        result = await search(db, MemberSearchCond(team_name="teamA", age_loe=15))
        assert [dto.username for dto in result] == ["member1"]

    async def test_search_no_filter_returns_all(self, db: AsyncSession, members, search):
        """조건이 없으면 팀 없는 회원 포함 전체."""
        db.add(Member(username="loner", age=50))
        await db.flush()

        result = await search(db, MemberSearchCond())
        assert [dto.username for dto in result] == ["member1", "member2", "member3", "member4", "loner"]
        assert result[-1].team_id is None
        assert result[-1].team_name is None

    async def test_search_team_only_excludes_others(self, db: AsyncSession, members, search):
        """팀 조건만 있으면 다른 팀과 팀 없는 회원은 제외."""
        db.add(Member(username="loner", age=50))
        await db.flush()

        result = await search(db, MemberSearchCond(team_name="teamA"))
        assert [dto.username for dto in result] == ["member1", "member2"]

    async def test_search_age_range_inclusive(self, db: AsyncSession, members, search):
        """나이 범위는 양 끝 포함."""
        result = await search(db, MemberSearchCond(age_goe=20, age_loe=30))
        assert [dto.age for dto in result] == [20, 30]

    async def test_search_username_exact(self, db: AsyncSession, members, search):
        """이름은 정확히 일치 (패턴 매칭 아님)."""
        assert await search(db, MemberSearchCond(username="member")) == []
        result = await search(db, MemberSearchCond(username="member2"))
        assert [dto.username for dto in result] == ["member2"]

    async def test_search_blank_text_is_absent(self, db: AsyncSession, members, search):
        """공백 문자열은 조건 없음으로 취급."""
        result = await search(db, MemberSearchCond(username="  ", team_name=""))
        assert len(result) == 4


class TestSearchPage:
    """검색 페이지네이션 테스트."""

    async def test_page_simple(self, db: AsyncSession, members):
        """첫 페이지 3건, 전체 4건."""
        page = await member_repository.search_page_simple(db, MemberSearchCond(), PageRequest.of(0, 3))
        assert page.size == 3
        assert [dto.username for dto in page.items] == ["member1", "member2", "member3"]
        assert page.total == 4
        assert page.pages == 2

    async def test_page_simple_second_page(self, db: AsyncSession, members):
        """offset=1, size=2 → 2건, 전체 4건."""
        page = await member_repository.search_page_simple(db, MemberSearchCond(), PageRequest(offset=1, size=2))
        assert [dto.username for dto in page.items] == ["member2", "member3"]
        assert page.total == 4

    async def test_page_simple_filtered_total(self, db: AsyncSession, members):
        """전체 개수도 같은 조건으로 셈."""
        page = await member_repository.search_page_simple(
            db, MemberSearchCond(team_name="teamB"), PageRequest(offset=0, size=1)
        )
        assert [dto.username for dto in page.items] == ["member3"]
        assert page.total == 2

    async def test_page_complex_full_page_counts(self, db: AsyncSession, members):
        """꽉 찬 페이지는 COUNT 쿼리로 전체 개수 계산."""
        page = await member_repository.search_page_complex(db, MemberSearchCond(), PageRequest(offset=0, size=2))
        assert [dto.username for dto in page.items] == ["member1", "member2"]
        assert page.total == 4

    async def test_page_complex_last_page_skips_count(self, db: AsyncSession, members, monkeypatch):
        """마지막 페이지면 COUNT 없이 offset + 결과 수."""
        calls = []
        original = pagination.get_page

        async def spy(content, page_request, count):
            async def counted():
                calls.append(1)
                return await count()
            return await original(content, page_request, counted)

        monkeypatch.setattr("app.repositories.member_repository.get_page", spy)

        page = await member_repository.search_page_complex(db, MemberSearchCond(), PageRequest(offset=3, size=2))
        assert [dto.username for dto in page.items] == ["member4"]
        assert page.total == 4
        assert calls == []

    @pytest.mark.parametrize(
        "cond",
        [
            MemberSearchCond(),
            MemberSearchCond(team_name="teamB", age_goe=35),
            MemberSearchCond(age_loe=20),
            MemberSearchCond(username="member3", team_name="teamB"),
        ],
    )
    async def test_page_complex_count_matches_simple(self, db: AsyncSession, members, cond):
        """COUNT가 실행되는 꽉 찬 페이지에서 두 방식의 전체 개수가 같음."""
        page_request = PageRequest(offset=0, size=1)
        simple = await member_repository.search_page_simple(db, cond, page_request)
        complex_ = await member_repository.search_page_complex(db, cond, page_request)
        assert complex_.items == simple.items
        assert complex_.total == simple.total

    async def test_page_complex_with_filter(self, db: AsyncSession, members):
        """조건 + 페이지."""
        page = await member_repository.search_page_complex(
            db, MemberSearchCond(team_name="teamA"), PageRequest(offset=0, size=10)
        )
        assert [dto.username for dto in page.items] == ["member1", "member2"]
        assert page.total == 2


class TestEntity:
    """엔티티 매핑 테스트."""

    async def test_join_all_members(self, db: AsyncSession, members):
        """회원-팀 조인 시 4건."""
        db.expunge_all()
        result = await db.execute(select(Member).join(Member.team))
        assert len(result.scalars().all()) == 4

    async def test_team_members_inverse(self, db: AsyncSession, members):
        """팀에서 소속 회원 목록 조회."""
        from sqlalchemy.orm import selectinload

        db.expunge_all()
        result = await db.execute(
            select(Team).options(selectinload(Team.members)).where(Team.name == "teamA")
        )
        team = result.scalar_one()
        assert sorted(m.username for m in team.members) == ["member1", "member2"]
