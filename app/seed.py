"""초기 데이터 시드 스크립트 — 팀 2개와 회원 100명 생성.

Seed script — Creates two teams and one hundred members for local use.

Usage:
    python -m app.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - 100명 회원: member0..member99, 나이 = 번호, 짝수는 teamA / 홀수는 teamB
      (100 members, age = index, even → teamA, odd → teamB)
"""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session, engine, Base
from app.models import Member, Team

MEMBER_COUNT = 100


async def seed_members(db: AsyncSession, count: int = MEMBER_COUNT) -> bool:
    """팀과 회원을 생성합니다.

    Insert teamA, teamB and ``count`` members into an existing schema.

    Idempotent: 팀이 하나라도 있으면 건너뜁니다 (Skips when any team exists).

    Returns:
        bool: 데이터를 넣었는지 여부 (Whether anything was inserted)
    """
    result = await db.execute(select(Team).limit(1))
    if result.scalar_one_or_none():
        return False

    team_a: Team = Team(name="teamA")
    team_b: Team = Team(name="teamB")
    db.add_all([team_a, team_b])

    for i in range(count):
        team = team_a if i % 2 == 0 else team_b
        db.add(Member(username=f"member{i}", age=i, team=team))

    await db.flush()
    return True


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Create tables if they don't exist, then insert the sample data.
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        if not await seed_members(db):
            print("Already seeded. Skipping.")
            return
        await db.commit()
        print(f"Seeded: teams=teamA,teamB members={MEMBER_COUNT}")


if __name__ == "__main__":
    asyncio.run(seed())
