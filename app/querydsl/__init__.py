"""쿼리 빌더 패키지 — SQLAlchemy 위의 얇은 타입 안전 쿼리 계층.

Query builder package — a thin fluent layer over SQLAlchemy ``Select``.

Modules:
    factory: 세션 바인딩 진입점과 벌크 문장 (Session-bound entry point, bulk clauses)
    query: 플루언트 SELECT와 결과 조회 (Fluent SELECT and terminal fetches)
    predicate: 동적 조건 빌더 (Dynamic predicate builder)
    projections: DTO 프로젝션 (DTO projection strategies)
"""

from app.querydsl.factory import DeleteClause, QueryFactory, UpdateClause
from app.querydsl.predicate import PredicateBuilder, all_of
from app.querydsl.projections import Projection, Projections, as_, query_projection
from app.querydsl.query import Query, QueryResults

__all__ = [
    "QueryFactory", "UpdateClause", "DeleteClause",
    "Query", "QueryResults",
    "PredicateBuilder", "all_of",
    "Projection", "Projections", "as_", "query_projection",
]
