"""커스텀 예외 클래스 모듈.

Custom exception classes module.
HTTP-facing errors are pre-configured HTTPException subclasses; query
configuration errors are plain exceptions raised before any SQL runs.
Storage errors (connectivity, integrity, MultipleResultsFound) are not
wrapped and propagate from SQLAlchemy unchanged.

Usage:
    from app.utils.exceptions import NotFoundError, ProjectionError
    raise NotFoundError("Member not found")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised by services when a lookup by id finds nothing; repositories
    themselves return None.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ProjectionError(ValueError):
    """프로젝션 설정 오류.

    Projection configuration error.
    Raised when a projection is built: constructor column count or type
    mismatch, or a setter projection onto a DTO that needs arguments.
    """
