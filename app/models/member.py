"""회원 및 팀 관련 SQLAlchemy ORM 모델 정의.

Member and Team SQLAlchemy ORM model definitions.
A member belongs to at most one team; the team side is the inverse
collection and holds no foreign key.

Tables:
    - teams: 팀 (Teams)
    - members: 회원 (Members, optional team reference)
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Team(Base):
    """팀 모델.

    Team model — the inverse side of the Member → Team association.

    Attributes:
        id: 고유 식별자 (Autoincrement primary key)
        name: 팀 이름 (Team name)

    Relationships:
        members: 소속 회원 목록 (Members referencing this team)
    """

    __tablename__ = "teams"

    # 팀 고유 식별자 — Team identifier (autoincrement)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 팀 이름 — Team display name
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # 관계 — Relationships (mappedBy side, no FK column here)
    members: Mapped[list["Member"]] = relationship("Member", back_populates="team")


class Member(Base):
    """회원 모델.

    Member model — username and age are mutable; the team reference is
    optional. Setting ``member.team`` also appends the member to
    ``team.members`` through the back-populated relationship.

    Attributes:
        id: 고유 식별자 (Autoincrement primary key)
        username: 회원 이름 (Username, nullable)
        age: 나이 (Age)
        team_id: 소속 팀 FK (Team foreign key, nullable)

    Relationships:
        team: 소속 팀 (Owning side of the association)
    """

    __tablename__ = "members"

    # 회원 고유 식별자 — Member identifier (autoincrement)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 회원 이름 — Username (nullable, 정렬 테스트에서 null 사용)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # 나이 — Age in years
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 소속 팀 FK — Team reference (팀 없는 회원 허용, members without a team are allowed)
    team_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("teams.id"), nullable=True)

    # 관계 — Relationships
    team: Mapped[Team | None] = relationship("Team", back_populates="members")

    def change_team(self, team: Team) -> None:
        """소속 팀을 변경합니다 (Move the member to another team)."""
        self.team = team
