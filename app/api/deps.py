"""FastAPI 의존성 주입 모듈 — 검색 조건 및 페이지 파라미터.

FastAPI dependency injection module — Search filters and paging params.
Builds MemberSearchCond and PageRequest from query parameters so the
routers receive validated objects.
"""

from typing import Annotated

from fastapi import Query

from app.config import settings
from app.schemas.member import MemberSearchCond
from app.utils.pagination import PageRequest


def get_search_cond(
    username: Annotated[str | None, Query()] = None,
    team_name: Annotated[str | None, Query()] = None,
    age_goe: Annotated[int | None, Query()] = None,
    age_loe: Annotated[int | None, Query()] = None,
) -> MemberSearchCond:
    """쿼리 파라미터로 검색 조건을 만듭니다 (Absent params impose no constraint)."""
    return MemberSearchCond(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


def get_page_request(
    offset: Annotated[int, Query(ge=0)] = 0,
    size: Annotated[int, Query(gt=0, le=settings.MAX_PAGE_SIZE)] = settings.DEFAULT_PAGE_SIZE,
) -> PageRequest:
    """쿼리 파라미터로 페이지 요청을 만듭니다 (422 on a negative offset or a bad size)."""
    return PageRequest(offset=offset, size=size)
