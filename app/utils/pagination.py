"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the PageRequest/Page models and two total-count strategies:
``paginate`` always runs a count query, ``get_page`` skips it when the
total can be inferred from the returned slice.
"""

import math
from collections.abc import Awaitable, Callable
from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel, Field, computed_field
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class PageRequest(BaseModel):
    """페이지 요청 모델.

    Offset/size window requested by the caller.

    Attributes:
        offset: 시작 위치, 0부터 (Index of the first row, 0-based)
        size: 페이지 크기 (Maximum rows in the page)
    """

    offset: int = Field(0, ge=0)  # 시작 위치 (Start offset)
    size: int = Field(20, gt=0)  # 페이지 크기 (Page size)

    @classmethod
    def of(cls, page: int, size: int) -> "PageRequest":
        """페이지 번호(0부터)와 크기로 생성 (Build from a 0-based page number)."""
        return cls(offset=page * size, size=size)


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        offset: 요청 오프셋 (Requested offset)
        size: 요청 페이지 크기 (Requested page size)
    """

    items: list[T]  # 현재 페이지 항목 목록 (Paginated items)
    total: int  # 전체 항목 수 (Total item count)
    offset: int  # 요청 오프셋 (Requested offset)
    size: int  # 페이지 크기 (Requested page size)

    @computed_field
    @property
    def page(self) -> int:
        """현재 페이지 번호, 0부터 (Current page, 0-indexed)."""
        return self.offset // self.size

    @computed_field
    @property
    def pages(self) -> int:
        """전체 페이지 수 (Total pages, ceil(total/size))."""
        return math.ceil(self.total / self.size)


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page_request: PageRequest,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated SQLAlchemy query, returning items and total count.
    Runs two queries: one for the total count (via subquery) and one for
    the actual page of results with OFFSET/LIMIT.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Base query to paginate)
        page_request: 오프셋과 크기 (Offset and size)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수) 튜플
            (Tuple of paginated items and total count)
    """
    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    # 페이지 항목 조회 — OFFSET/LIMIT 적용 (Fetch page items with offset/limit)
    result = await db.execute(query.offset(page_request.offset).limit(page_request.size))
    items: Sequence[Any] = result.scalars().all()

    return items, total


async def get_page(
    content: Sequence[T],
    page_request: PageRequest,
    count: Callable[[], Awaitable[int | None]],
) -> Page[T]:
    """필요할 때만 COUNT 쿼리를 실행하여 페이지를 만듭니다.

    Build a page whose total is inferred from the slice when possible:
        - 첫 페이지이고 결과가 size보다 적으면 → total = 결과 수
          (first page and short slice → total = len(content))
        - 결과가 있고 size보다 적으면 → total = offset + 결과 수
          (non-empty short slice is the last page → total = offset + len(content))
        - 그 외에는 count()를 실행 (otherwise the count query runs)

    Args:
        content: 이미 조회된 페이지 항목 (Rows already fetched for the window)
        page_request: 요청한 오프셋과 크기 (Requested offset and size)
        count: COUNT 쿼리 코루틴 팩토리 (Awaited only when the total is unknown)

    Returns:
        Page[T]: 페이지 결과 (The page)
    """
    fetched = len(content)
    if page_request.offset == 0 and fetched < page_request.size:
        total = fetched
    elif 0 < fetched < page_request.size:
        total = page_request.offset + fetched
    else:
        total = await count() or 0

    return Page(items=list(content), total=total, offset=page_request.offset, size=page_request.size)
