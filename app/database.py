"""데이터베이스 엔진 및 세션.

Async engine and session factory for the member/team schema. Every
statement on the engine is timed by the slow-query listener; the schema
itself is created by ``app.seed`` (no migrations).
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import settings
from app.utils.query_logging import register_query_logging

engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    pool_size=5,
    max_overflow=10,
)
register_query_logging(engine)

# 커밋 후에도 로딩된 속성 유지 (Attributes stay loaded after commit)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Team/Member 모델의 선언적 베이스 (Declarative base)."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 세션 의존성.

    Request-scoped session. Endpoints are read-only, so nothing is
    committed here; the session is closed when the request ends.

    Yields:
        AsyncSession: 비동기 세션 (Async session)
    """
    async with async_session() as session:
        yield session
