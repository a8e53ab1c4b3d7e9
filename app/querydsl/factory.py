"""쿼리 팩토리 — 세션 하나에 바인딩된 쿼리 진입점.

Query factory bound to one AsyncSession. Builds SELECT queries and bulk
UPDATE/DELETE clauses.

Bulk statements bypass the unit of work, so their session semantics are
fixed here:
    1. 대기 중인 변경을 먼저 flush (pending changes are flushed first)
    2. synchronize_session=False 로 실행 (executed without in-memory sync)
    3. 실행 후 세션의 모든 객체를 expire (every loaded instance is expired)
The next query returning an expired row reloads it from the database.
"""

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.querydsl.predicate import PredicateBuilder
from app.querydsl.projections import Projection
from app.querydsl.query import Query


class _BulkClause:
    """벌크 문장 공통 로직 (Shared WHERE handling and execution for bulk statements)."""

    def __init__(self, db: AsyncSession, entity: Any) -> None:
        self._db: AsyncSession = db
        self._entity: Any = entity
        self._conditions: list[Any] = []

    def where(self, *conditions: Any) -> "_BulkClause":
        for condition in conditions:
            if isinstance(condition, PredicateBuilder):
                condition = condition.value
            if condition is not None:
                self._conditions.append(condition)
        return self

    def _statement(self) -> Any:
        raise NotImplementedError

    async def execute(self) -> int:
        """문장을 실행하고 영향받은 행 수를 반환합니다 (Returns the affected row count)."""
        await self._db.flush()
        statement = self._statement().execution_options(synchronize_session=False)
        result = await self._db.execute(statement)
        self._db.expire_all()
        return result.rowcount


class UpdateClause(_BulkClause):
    """벌크 UPDATE (Bulk UPDATE built column by column)."""

    def __init__(self, db: AsyncSession, entity: Any) -> None:
        super().__init__(db, entity)
        self._values: dict[Any, Any] = {}

    def set(self, column: Any, value: Any) -> "UpdateClause":
        self._values[column] = value
        return self

    def _statement(self) -> Any:
        if not self._values:
            raise ValueError("UpdateClause.execute() called without any set()")
        return update(self._entity).where(*self._conditions).values(self._values)


class DeleteClause(_BulkClause):
    """벌크 DELETE (Bulk DELETE)."""

    def _statement(self) -> Any:
        return delete(self._entity).where(*self._conditions)


class QueryFactory:
    """쿼리 팩토리.

    Entry point for building queries against one session.

    Usage:
        qf = QueryFactory(db)
        member = await qf.select_from(Member).where(Member.username == "member1").fetch_one()
        dtos = await qf.select(Projections.fields(MemberDto, Member.username, Member.age)).from_(Member).fetch()
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db: AsyncSession = db

    def select_from(self, entity: Any) -> Query:
        """엔티티 조회 쿼리 (SELECT entity FROM entity)."""
        return Query(self._db, select(entity))

    def select(self, *columns: Any) -> Query:
        """컬럼, 튜플 또는 프로젝션 조회 쿼리.

        SELECT of one column, several columns, or a single Projection.
        """
        if len(columns) == 1 and isinstance(columns[0], Projection):
            projection: Projection = columns[0]
            return Query(self._db, select(*projection.columns), projection)
        return Query(self._db, select(*columns))

    def update(self, entity: Any) -> UpdateClause:
        return UpdateClause(self._db, entity)

    def delete(self, entity: Any) -> DeleteClause:
        return DeleteClause(self._db, entity)
