"""동적 조건 빌더.

Mutable accumulator for dynamic WHERE clauses. ``None`` operands are
ignored, so optional filters can be chained without branching:

    builder = PredicateBuilder()
    builder.and_(Member.username == name if name else None)
    query.where(builder)
"""

from typing import Any

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement


class PredicateBuilder:
    """AND/OR 조건을 누적하는 빌더 (Accumulates AND/OR conditions, skipping None)."""

    def __init__(self, initial: ColumnElement[bool] | None = None) -> None:
        self._predicate: ColumnElement[bool] | None = initial

    def and_(self, right: "ColumnElement[bool] | PredicateBuilder | None") -> "PredicateBuilder":
        right = _unwrap(right)
        if right is not None:
            self._predicate = right if self._predicate is None else and_(self._predicate, right)
        return self

    def or_(self, right: "ColumnElement[bool] | PredicateBuilder | None") -> "PredicateBuilder":
        right = _unwrap(right)
        if right is not None:
            self._predicate = right if self._predicate is None else or_(self._predicate, right)
        return self

    @property
    def value(self) -> ColumnElement[bool] | None:
        """누적된 조건, 비어 있으면 None (Accumulated predicate, None when empty)."""
        return self._predicate

    @property
    def has_value(self) -> bool:
        return self._predicate is not None


def _unwrap(condition: Any) -> ColumnElement[bool] | None:
    if isinstance(condition, PredicateBuilder):
        return condition.value
    return condition


def all_of(*conditions: "ColumnElement[bool] | PredicateBuilder | None") -> ColumnElement[bool] | None:
    """None이 아닌 조건들의 AND (Conjunction of the present conditions, None if none)."""
    builder = PredicateBuilder()
    for condition in conditions:
        builder.and_(condition)
    return builder.value
