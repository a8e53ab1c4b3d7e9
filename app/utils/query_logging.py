"""느린 쿼리 로깅 — SQLAlchemy 엔진 이벤트 리스너.

Slow-query logging. Times every cursor execution on an engine and ships
statements slower than SLOW_QUERY_MS to Axiom. A statement that fails
drops its start time in handle_error, so nothing accumulates on a pooled
connection.
"""

import time
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine

from app.config import settings
from app.utils import axiom

_START_KEY = "query_start_time"


def _before_cursor_execute(conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: bool) -> None:
    conn.info.setdefault(_START_KEY, []).append(time.perf_counter())


def _after_cursor_execute(conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: bool) -> None:
    started: list[float] = conn.info.get(_START_KEY) or []
    if not started:
        return
    duration_ms = round((time.perf_counter() - started.pop()) * 1000, 2)
    if duration_ms < settings.SLOW_QUERY_MS:
        return

    axiom.ingest({
        "kind": "slow_query",
        "statement": axiom.truncate(statement),
        "duration_ms": duration_ms,
        "executemany": executemany,
    })


def _handle_error(context: Any) -> None:
    # 실패한 문장은 after_cursor_execute에 도달하지 않음
    conn = context.connection
    if conn is None:
        return
    started: list[float] = conn.info.get(_START_KEY) or []
    if started:
        started.pop()


def register_query_logging(engine: AsyncEngine) -> None:
    """엔진에 쿼리 시간 측정 리스너를 등록합니다.

    Attach the timing listeners to the sync engine behind an AsyncEngine.
    Safe to call more than once per engine.

    Args:
        engine: 비동기 엔진 (Async engine to instrument)
    """
    sync_engine = engine.sync_engine
    if event.contains(sync_engine, "before_cursor_execute", _before_cursor_execute):
        return
    event.listen(sync_engine, "before_cursor_execute", _before_cursor_execute)
    event.listen(sync_engine, "after_cursor_execute", _after_cursor_execute)
    event.listen(sync_engine, "handle_error", _handle_error)
