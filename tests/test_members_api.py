"""회원 API 엔드포인트 테스트.

Member API endpoint tests — search, both paged variants, lookup by id,
and parameter validation.
"""

from httpx import AsyncClient

API = "/api/v1/members"


class TestHealth:
    """헬스 체크."""

    async def test_health(self, client: AsyncClient):
        """GET /health → ok."""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_cors_allows_get_only(self, client: AsyncClient):
        """조회 전용 API — GET preflight만 허용."""
        headers = {"Origin": "http://example.com", "Access-Control-Request-Method": "GET"}
        response = await client.options(API, headers=headers)
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

        headers["Access-Control-Request-Method"] = "POST"
        response = await client.options(API, headers=headers)
        assert response.status_code == 400


class TestSearchMembers:
    """GET /api/v1/members 테스트."""

    async def test_search_scenario(self, client: AsyncClient, members):
        """나이 35~55, teamB → member4 한 건."""
        response = await client.get(API, params={"age_goe": 35, "age_loe": 55, "team_name": "teamB"})
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["username"] == "member4"
        assert data[0]["age"] == 40
        assert data[0]["team_name"] == "teamB"
        assert data[0]["member_id"] == members["member4"].id

    async def test_search_all(self, client: AsyncClient, members):
        """조건 없으면 전체, id 순."""
        response = await client.get(API)
        assert response.status_code == 200
        assert [m["username"] for m in response.json()] == ["member1", "member2", "member3", "member4"]

    async def test_search_empty_result(self, client: AsyncClient, members):
        """일치 없음 → 빈 리스트."""
        response = await client.get(API, params={"username": "nobody"})
        assert response.status_code == 200
        assert response.json() == []

    async def test_search_invalid_age(self, client: AsyncClient):
        """숫자가 아닌 나이 → 422."""
        response = await client.get(API, params={"age_goe": "old"})
        assert response.status_code == 422


class TestSearchPage:
    """GET /api/v1/members/page, /page/complex 테스트."""

    async def test_page(self, client: AsyncClient, members):
        """첫 페이지 3건, 전체 4건."""
        response = await client.get(f"{API}/page", params={"offset": 0, "size": 3})
        assert response.status_code == 200
        data = response.json()
        assert [m["username"] for m in data["items"]] == ["member1", "member2", "member3"]
        assert data["total"] == 4
        assert data["page"] == 0
        assert data["pages"] == 2

    async def test_page_complex_last_page(self, client: AsyncClient, members):
        """마지막 페이지 — offset + 결과 수."""
        response = await client.get(f"{API}/page/complex", params={"offset": 2, "size": 3})
        assert response.status_code == 200
        data = response.json()
        assert [m["username"] for m in data["items"]] == ["member3", "member4"]
        assert data["total"] == 4

    async def test_page_complex_with_filter(self, client: AsyncClient, members):
        """조건 + 꽉 찬 페이지."""
        response = await client.get(f"{API}/page/complex", params={"team_name": "teamA", "size": 2})
        assert response.status_code == 200
        data = response.json()
        assert [m["username"] for m in data["items"]] == ["member1", "member2"]
        assert data["total"] == 2

    async def test_page_default_size(self, client: AsyncClient, members):
        """size 생략 시 기본 크기."""
        response = await client.get(f"{API}/page")
        assert response.status_code == 200
        assert response.json()["size"] == 20

    async def test_negative_offset(self, client: AsyncClient):
        """음수 offset → 422."""
        response = await client.get(f"{API}/page", params={"offset": -1})
        assert response.status_code == 422

    async def test_size_too_large(self, client: AsyncClient):
        """최대 크기 초과 → 422."""
        response = await client.get(f"{API}/page/complex", params={"size": 1000})
        assert response.status_code == 422

    async def test_zero_size(self, client: AsyncClient):
        """size=0 → 422."""
        response = await client.get(f"{API}/page", params={"size": 0})
        assert response.status_code == 422


class TestGetMember:
    """GET /api/v1/members/{member_id} 테스트."""

    async def test_get_member(self, client: AsyncClient, members, teams):
        """ID로 조회."""
        member = members["member2"]
        response = await client.get(f"{API}/{member.id}")
        assert response.status_code == 200
        assert response.json() == {
            "id": member.id,
            "username": "member2",
            "age": 20,
            "team_id": teams["teamA"].id,
        }

    async def test_get_member_not_found(self, client: AsyncClient):
        """없는 ID → 404."""
        response = await client.get(f"{API}/9999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Member not found"
