"""Axiom 로그 전송 유틸리티.

Shared Axiom client used by the HTTP logging middleware and the
slow-query listener. When AXIOM_API_TOKEN or AXIOM_DATASET is empty,
every call is a no-op.
"""

import re
from typing import Any

from axiom_py import Client as AxiomClient

from app.config import settings

# 마스킹 대상 필드 패턴 — Keys whose values never leave the process
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

_client: AxiomClient | None = None


def get_client() -> AxiomClient | None:
    """설정된 경우 Axiom 클라이언트를 반환합니다 (Lazily built, None when unconfigured)."""
    global _client
    if _client is None and settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
        _client = AxiomClient(token=settings.AXIOM_API_TOKEN)
    return _client


def mask(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else mask(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask(item, depth + 1) for item in data[:20]]
    return data


def truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 — Truncate large strings to keep events small."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


def ingest(event: dict[str, Any]) -> bool:
    """이벤트 하나를 Axiom에 전송합니다.

    Send a single event to the configured dataset.

    Args:
        event: 로그 이벤트 (Structured log event)

    Returns:
        bool: 전송 여부 (False when Axiom is unconfigured or the ingest failed)
    """
    client = get_client()
    if client is None:
        return False
    try:
        client.ingest_events(settings.AXIOM_DATASET, [event])
    except Exception:
        return False  # 로깅 실패가 요청/쿼리에 영향주지 않도록 — Never break callers on log failure
    return True
