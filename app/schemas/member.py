"""회원 관련 Pydantic 요청/응답 스키마 정의.

Member-related Pydantic request/response schema definitions.
The DTOs here are read-only projection targets; they are never persisted.
"""

from pydantic import BaseModel

from app.querydsl.projections import query_projection


@query_projection("member_id", "username", "age", "team_id", "team_name")
class MemberTeamDto(BaseModel):
    """회원 + 팀 조회 결과 DTO.

    Member joined with its (optional) team, the row shape of member search.

    Attributes:
        member_id: 회원 ID (Member identifier)
        username: 회원 이름 (Username, nullable)
        age: 나이 (Age)
        team_id: 팀 ID, 팀 없으면 None (Team identifier, None without a team)
        team_name: 팀 이름, 팀 없으면 None (Team name, None without a team)
    """

    member_id: int  # 회원 ID (Member identifier)
    username: str | None  # 회원 이름 (Username)
    age: int  # 나이 (Age)
    team_id: int | None  # 팀 ID (Team identifier, nullable)
    team_name: str | None  # 팀 이름 (Team name, nullable)


@query_projection("username", "age")
class MemberDto(BaseModel):
    """회원 이름/나이 DTO.

    Username and age. Constructible without arguments, so it works with
    every projection strategy.
    """

    username: str | None = None  # 회원 이름 (Username)
    age: int = 0  # 나이 (Age)


@query_projection("name", "age")
class UserDto(BaseModel):
    """사용자 DTO — 필드 이름이 엔티티와 다름.

    ``name`` maps from ``Member.username`` only when the column is aliased
    with ``as_(Member.username, "name")``; otherwise it stays None.
    """

    name: str | None = None  # 사용자 이름 (Display name)
    age: int = 0  # 나이 (Age)


class MemberSearchCond(BaseModel):
    """회원 검색 조건.

    Optional search filters. None (or blank text) means no constraint on
    that dimension; age bounds are inclusive.

    Attributes:
        username: 회원 이름 일치 (Exact username)
        team_name: 팀 이름 일치 (Exact team name)
        age_goe: 최소 나이, 포함 (Minimum age, inclusive)
        age_loe: 최대 나이, 포함 (Maximum age, inclusive)
    """

    username: str | None = None  # 회원 이름 (Exact username match)
    team_name: str | None = None  # 팀 이름 (Exact team name match)
    age_goe: int | None = None  # 나이 >= (Age greater or equal)
    age_loe: int | None = None  # 나이 <= (Age less or equal)


class MemberResponse(BaseModel):
    """회원 응답 스키마.

    Member entity read shape.

    Attributes:
        id: 회원 ID (Member identifier)
        username: 회원 이름 (Username)
        age: 나이 (Age)
        team_id: 팀 ID (Team identifier, nullable)
    """

    id: int  # 회원 ID (Member identifier)
    username: str | None  # 회원 이름 (Username)
    age: int  # 나이 (Age)
    team_id: int | None  # 팀 ID (Team identifier, nullable)
