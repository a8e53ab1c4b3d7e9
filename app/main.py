"""회원 조회 API 엔트리포인트.

Member query API entry point. Wires request logging, CORS for the
read-only member routes, and the health check.

Run:
    uvicorn app.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.members import router as members_router
from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware

app: FastAPI = FastAPI(title=settings.APP_NAME, version="1.0.0")

# 요청 로그 — Axiom 미설정 시 그대로 통과 (pass-through without Axiom)
app.add_middleware(AxiomLoggingMiddleware)

# 조회 전용 API — GET만 허용 (Read-only surface)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(members_router, prefix="/api/v1/members", tags=["Members"])


@app.get("/health")
async def health_check() -> dict[str, str]:
    """헬스 체크 (Liveness probe; not logged)."""
    return {"status": "ok"}
