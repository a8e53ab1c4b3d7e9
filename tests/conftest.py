"""테스트 인프라 — 테스트 DB 엔진, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Test database engine, session, and httpx client fixtures.
Defaults to an in-memory SQLite database (aiosqlite); set TEST_DATABASE_URL
to run the same suite against PostgreSQL. The schema is recreated for
every test.
"""

import os
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models import Member, Team
from app.utils.query_logging import register_query_logging

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


def _create_engine() -> AsyncEngine:
    if TEST_DATABASE_URL.startswith("sqlite"):
        # 인메모리 SQLite는 연결 하나를 공유해야 스키마가 유지됨
        return create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 만듭니다."""
    eng = _create_engine()
    register_query_logging(eng)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def teams(db: AsyncSession) -> dict[str, Team]:
    """teamA, teamB를 생성합니다."""
    result = {}
    for name in ("teamA", "teamB"):
        team = Team(name=name)
        db.add(team)
        result[name] = team
    await db.flush()
    return result


@pytest_asyncio.fixture
async def members(db: AsyncSession, teams) -> dict[str, Member]:
    """member1(10, teamA), member2(20, teamA), member3(30, teamB), member4(40, teamB)."""
    result = {}
    for name, age, team_name in [
        ("member1", 10, "teamA"),
        ("member2", 20, "teamA"),
        ("member3", 30, "teamB"),
        ("member4", 40, "teamB"),
    ]:
        member = Member(username=name, age=age, team_id=teams[team_name].id)
        db.add(member)
        result[name] = member
    await db.flush()
    return result


class FakeAxiomClient:
    """ingest_events 호출을 기록하는 Axiom 클라이언트 대역."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.events: list[tuple[str, dict]] = []

    def ingest_events(self, dataset: str, events: list[dict]) -> None:
        if self.fail:
            raise RuntimeError("axiom unavailable")
        for event in events:
            self.events.append((dataset, event))
