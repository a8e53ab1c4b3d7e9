"""회원 라우터 — 회원 조회 및 검색 엔드포인트.

Member Router — Lookup and search endpoints.
Read-only; the routers only translate HTTP parameters and delegate to
member_service.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_page_request, get_search_cond
from app.database import get_db
from app.schemas.member import MemberResponse, MemberSearchCond, MemberTeamDto
from app.services.member_service import member_service
from app.utils.pagination import Page, PageRequest

router: APIRouter = APIRouter()


@router.get("", response_model=list[MemberTeamDto])
async def search_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    cond: Annotated[MemberSearchCond, Depends(get_search_cond)],
) -> list[MemberTeamDto]:
    """조건에 맞는 회원 전체를 검색합니다.

    Search members; every filter is optional.
    """
    return await member_service.search_members(db, cond)


@router.get("/page", response_model=Page[MemberTeamDto])
async def search_members_page(
    db: Annotated[AsyncSession, Depends(get_db)],
    cond: Annotated[MemberSearchCond, Depends(get_search_cond)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[MemberTeamDto]:
    """회원 검색 페이지 — 항상 COUNT 쿼리 실행.

    Paged search; the total always comes from a count query.
    """
    return await member_service.search_members_page(db, cond, page_request)


@router.get("/page/complex", response_model=Page[MemberTeamDto])
async def search_members_page_complex(
    db: Annotated[AsyncSession, Depends(get_db)],
    cond: Annotated[MemberSearchCond, Depends(get_search_cond)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[MemberTeamDto]:
    """회원 검색 페이지 — 마지막 페이지면 COUNT 생략.

    Paged search; the count query is skipped on a provable last page.
    """
    return await member_service.search_members_page(db, cond, page_request, lazy_count=True)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원 정보를 조회합니다 (404 when the member does not exist)."""
    return await member_service.get_member(db, member_id)
