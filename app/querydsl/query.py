"""세션에 바인딩된 플루언트 SELECT 쿼리.

Fluent SELECT query bound to an AsyncSession. Each builder method replaces
the wrapped ``Select`` and returns the same query object, so calls chain
the way SQLAlchemy's own generative API does.

Result shapes:
    - 엔티티 하나 또는 컬럼 하나 선택 → scalar 값 (entities or scalar values)
    - 여러 컬럼 선택 → ``Row`` 튜플 (SQLAlchemy rows)
    - 프로젝션 선택 → DTO 인스턴스 (projected DTOs)
"""

from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.engine import Result
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from app.querydsl.predicate import PredicateBuilder
from app.querydsl.projections import Projection

T = TypeVar("T")


class QueryResults(BaseModel, Generic[T]):
    """결과와 전체 개수를 함께 담는 모델.

    Page of results plus the total count of the unpaged query.

    Attributes:
        results: 조회 결과 (Fetched rows for the requested window)
        total: 전체 개수 (Count without offset/limit)
        offset: 적용된 오프셋 (Applied offset)
        limit: 적용된 리밋 (Applied limit, None when unbounded)
    """

    model_config = {"arbitrary_types_allowed": True}

    results: list[Any]
    total: int
    offset: int
    limit: int | None


class Query(Generic[T]):
    """플루언트 SELECT 쿼리 (Fluent SELECT bound to one session)."""

    def __init__(
        self,
        db: AsyncSession,
        statement: Select,
        projection: Projection | None = None,
    ) -> None:
        self._db: AsyncSession = db
        self._statement: Select = statement
        self._projection: Projection | None = projection
        self._last_join: Any = None
        self._fetch_join: bool = False
        self._offset: int = 0
        self._limit: int | None = None

    @property
    def statement(self) -> Select:
        """현재 SELECT 문 (The wrapped SQLAlchemy statement)."""
        return self._statement

    # ------------------------------------------------------------------
    # 빌더 — Builder methods
    # ------------------------------------------------------------------
    def from_(self, *entities: Any) -> "Query[T]":
        self._statement = self._statement.select_from(*entities)
        return self

    def join(self, target: Any, on: Any = None) -> "Query[T]":
        """내부 조인 — INNER JOIN on a relationship attribute or an entity with ``on``."""
        self._statement = self._statement.join(target, on) if on is not None else self._statement.join(target)
        self._last_join = target
        return self

    def left_join(self, target: Any, on: Any = None) -> "Query[T]":
        """외부 조인 — LEFT OUTER JOIN; rows without a match are kept."""
        self._statement = (
            self._statement.outerjoin(target, on) if on is not None else self._statement.outerjoin(target)
        )
        self._last_join = target
        return self

    def fetch_join(self) -> "Query[T]":
        """직전 조인의 연관 엔티티를 함께 로딩합니다.

        Populate the relationship of the previous join from the joined row
        instead of issuing a lazy load later.

        Raises:
            ValueError: 직전 조인이 연관관계 속성이 아닐 때 (Previous join is not a relationship)
        """
        if self._last_join is None or not hasattr(self._last_join, "property"):
            raise ValueError("fetch_join() must follow join()/left_join() on a relationship attribute")
        self._statement = self._statement.options(contains_eager(self._last_join))
        self._fetch_join = True
        return self

    def where(self, *conditions: Any) -> "Query[T]":
        """조건 추가 — AND of the given conditions; None and empty builders are skipped."""
        present = []
        for condition in conditions:
            if isinstance(condition, PredicateBuilder):
                condition = condition.value
            if condition is not None:
                present.append(condition)
        if present:
            self._statement = self._statement.where(*present)
        return self

    def order_by(self, *clauses: Any) -> "Query[T]":
        self._statement = self._statement.order_by(*clauses)
        return self

    def group_by(self, *clauses: Any) -> "Query[T]":
        self._statement = self._statement.group_by(*clauses)
        return self

    def having(self, *conditions: Any) -> "Query[T]":
        self._statement = self._statement.having(*conditions)
        return self

    def distinct(self) -> "Query[T]":
        self._statement = self._statement.distinct()
        return self

    def offset(self, offset: int) -> "Query[T]":
        self._offset = offset
        self._statement = self._statement.offset(offset)
        return self

    def limit(self, limit: int) -> "Query[T]":
        self._limit = limit
        self._statement = self._statement.limit(limit)
        return self

    # ------------------------------------------------------------------
    # 실행 — Terminal operations
    # ------------------------------------------------------------------
    def _is_scalar(self) -> bool:
        return self._projection is None and len(self._statement.column_descriptions) == 1

    def _shape(self, result: Result) -> Sequence[Any]:
        if self._projection is not None:
            return [self._projection.map_row(row) for row in result.all()]
        if self._is_scalar():
            scalars = result.unique().scalars() if self._fetch_join else result.scalars()
            return scalars.all()
        return result.all()

    async def fetch(self) -> list[T]:
        """전체 결과를 리스트로 조회합니다 (All rows; empty list when nothing matches)."""
        result = await self._db.execute(self._statement)
        return list(self._shape(result))

    async def fetch_one(self) -> T | None:
        """단건 조회.

        Fetch at most one result.

        Returns:
            결과 또는 None (The result, or None when nothing matches)

        Raises:
            MultipleResultsFound: 결과가 둘 이상일 때 (More than one row matched)
        """
        result = await self._db.execute(self._statement)
        if self._fetch_join:
            result = result.unique()
        if self._projection is not None:
            row = result.one_or_none()
            return None if row is None else self._projection.map_row(row)
        if self._is_scalar():
            return result.scalar_one_or_none()
        return result.one_or_none()

    async def fetch_first(self) -> T | None:
        """첫 번째 결과 — ``limit(1)`` then ``fetch_one()``."""
        return await self.limit(1).fetch_one()

    def count_statement(self) -> Select:
        """정렬/오프셋/리밋을 제거한 COUNT 쿼리 (Same predicate, no ordering or window)."""
        base = self._statement.order_by(None).limit(None).offset(None)
        return select(func.count()).select_from(base.subquery())

    async def fetch_count(self) -> int:
        """조건에 맞는 전체 행 수 (Row count of the unpaged query)."""
        return (await self._db.execute(self.count_statement())).scalar() or 0

    async def fetch_results(self) -> QueryResults[T]:
        """결과와 전체 개수 — content query plus a separate count query."""
        total = await self.fetch_count()
        results = await self.fetch() if total else []
        return QueryResults(results=results, total=total, offset=self._offset, limit=self._limit)
