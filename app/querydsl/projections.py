"""쿼리 결과 → DTO 프로젝션.

Projection of multi-column query rows into pydantic DTOs.

Three strategies are available:

* ``Projections.fields``      — direct field assignment (``model_construct``),
                                no constructor call, no validation.
* ``Projections.bean``        — ``Dto()`` with no arguments, then ``setattr``
                                per column. The DTO must be constructible
                                without arguments.
* ``Projections.constructor`` — positional call against the DTO's declared
                                constructor signature. Column count and types
                                are checked when the projection is built.

For ``fields`` and ``bean`` a column is matched to a DTO field by its label.
A label that matches no field is ignored and the field keeps its default, so
columns whose names differ from the target must be aliased with ``as_``.
"""

import types
from typing import Any, Generic, Sequence, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError
from sqlalchemy import Select
from sqlalchemy.engine import Row

from app.utils.exceptions import ProjectionError

DtoType = TypeVar("DtoType", bound=BaseModel)

_SIGNATURE_ATTR = "__query_projection__"


def query_projection(*field_names: str):
    """DTO의 생성자 시그니처를 선언하는 데코레이터.

    Declare the ordered constructor signature used by
    ``Projections.constructor``. Without arguments the DTO's field
    declaration order is used. The decorated class also gets a
    ``projection(*columns)`` classmethod building that constructor
    projection.

    Usage:
        @query_projection("username", "age")
        class MemberDto(BaseModel): ...

    Raises:
        ProjectionError: 선언한 이름이 DTO 필드가 아닐 때 (Unknown field name)
    """

    def decorator(cls: type[DtoType]) -> type[DtoType]:
        names = field_names or tuple(cls.model_fields)
        unknown = [name for name in names if name not in cls.model_fields]
        if unknown:
            raise ProjectionError(f"{cls.__name__} has no fields {unknown}")
        def projection(target: type[DtoType], *columns: Any) -> "Projection[DtoType]":
            return Projections.constructor(target, *columns)

        setattr(cls, _SIGNATURE_ATTR, tuple(names))
        setattr(cls, "projection", classmethod(projection))
        return cls

    return decorator


def constructor_signature(target: type[BaseModel]) -> tuple[str, ...]:
    """DTO의 생성자 파라미터 순서를 반환합니다 (Declared or field order)."""
    return getattr(target, _SIGNATURE_ATTR, None) or tuple(target.model_fields)


def as_(expression: Any, alias: str) -> Any:
    """식 또는 서브쿼리에 별칭을 붙입니다.

    Label a column expression, or a SELECT used as a scalar subquery,
    so it maps onto a differently named DTO field.
    """
    if isinstance(expression, Select):
        return expression.scalar_subquery().label(alias)
    return expression.label(alias)


def column_name(column: Any) -> str | None:
    """결과 컬럼의 이름 (Attribute key or label of a selected column)."""
    return getattr(column, "key", None) or getattr(column, "name", None)


def _column_python_type(column: Any) -> type | None:
    try:
        return column.type.python_type
    except (AttributeError, NotImplementedError):
        return None


def _accepted_types(annotation: Any) -> tuple[type, ...] | None:
    """필드 어노테이션이 허용하는 타입들, 검사 불가면 None."""
    if annotation is Any:
        return None
    if get_origin(annotation) in (Union, types.UnionType):
        accepted = tuple(a for a in get_args(annotation) if a is not type(None))
    else:
        accepted = (annotation,)
    if not all(isinstance(a, type) for a in accepted):
        return None
    return accepted


class Projection(Generic[DtoType]):
    """선택 컬럼과 행 → DTO 매핑을 묶은 객체.

    Bundles the selected columns with the row mapper for one strategy.
    """

    def __init__(self, target: type[DtoType], columns: Sequence[Any], strategy: str) -> None:
        if not columns:
            raise ProjectionError(f"Projection of {target.__name__} needs at least one column")
        self.target: type[DtoType] = target
        self.columns: list[Any] = list(columns)
        self.strategy: str = strategy
        self.names: list[str | None] = [column_name(c) for c in self.columns]

        if strategy == "constructor":
            self._check_constructor()
        elif strategy == "bean":
            self._check_no_arg_constructor()

    def _check_no_arg_constructor(self) -> None:
        try:
            self.target()
        except (ValidationError, TypeError) as exc:
            raise ProjectionError(
                f"{self.target.__name__} cannot be constructed without arguments"
            ) from exc

    def _check_constructor(self) -> None:
        signature = constructor_signature(self.target)
        if len(signature) != len(self.columns):
            raise ProjectionError(
                f"{self.target.__name__}{signature} expects {len(signature)} columns, "
                f"got {len(self.columns)}"
            )

        for position, (field_name, column) in enumerate(zip(signature, self.columns)):
            column_type = _column_python_type(column)
            accepted = _accepted_types(self.target.model_fields[field_name].annotation)
            if column_type is None or accepted is None:
                continue
            if not issubclass(column_type, accepted):
                raise ProjectionError(
                    f"{self.target.__name__} constructor parameter {position} "
                    f"'{field_name}' expects {' | '.join(a.__name__ for a in accepted)}, "
                    f"got column '{column_name(column)}' of type {column_type.__name__}"
                )

    def map_row(self, row: Row | Sequence[Any]) -> DtoType:
        """결과 행 하나를 DTO로 변환합니다 (Map one result row positionally)."""
        values = tuple(row)

        if self.strategy == "constructor":
            return self.target(**dict(zip(constructor_signature(self.target), values)))

        assigned = {
            name: value
            for name, value in zip(self.names, values)
            if name in self.target.model_fields
        }
        if self.strategy == "fields":
            return self.target.model_construct(**assigned)

        dto = self.target()
        for name, value in assigned.items():
            setattr(dto, name, value)
        return dto


class Projections:
    """프로젝션 팩토리 (Factory for the three projection strategies)."""

    @staticmethod
    def fields(target: type[DtoType], *columns: Any) -> Projection[DtoType]:
        return Projection(target, columns, "fields")

    @staticmethod
    def bean(target: type[DtoType], *columns: Any) -> Projection[DtoType]:
        return Projection(target, columns, "bean")

    @staticmethod
    def constructor(target: type[DtoType], *columns: Any) -> Projection[DtoType]:
        return Projection(target, columns, "constructor")
