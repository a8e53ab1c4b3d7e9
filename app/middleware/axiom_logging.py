"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures method, path, query params, status code, duration and the
error detail of failed responses, and sends one event per request.
Search filters arrive as query params; sensitive keys are masked anyway.
"""

import json
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.utils import axiom

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


async def _read_error_detail(response: Response) -> tuple[str, Response]:
    """에러 응답 body에서 사유를 추출하고 응답을 다시 구성합니다.

    Drain the streamed body of an error response, extract ``detail`` and
    return a rebuilt response carrying the same body.
    """
    body = b""
    async for chunk in response.body_iterator:
        body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

    try:
        data = json.loads(body)
        detail = data.get("detail", data) if isinstance(data, dict) else data
        detail = detail if isinstance(detail, str) else json.dumps(detail)
    except (json.JSONDecodeError, UnicodeDecodeError):
        detail = body.decode("utf-8", errors="replace")

    rebuilt = Response(
        content=body,
        status_code=response.status_code,
        headers=dict(response.headers),
        media_type=response.media_type,
    )
    return detail[:500], rebuilt


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom.
    Passes requests straight through when Axiom is not configured.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS or axiom.get_client() is None:
            return await call_next(request)

        start_time = time.perf_counter()
        log_event: dict[str, Any] = {
            "kind": "http_request",
            "method": request.method,
            "path": request.url.path,
        }
        if request.query_params:
            log_event["query_params"] = axiom.mask(dict(request.query_params))

        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            if status_code >= 400:
                log_event["error"], response = await _read_error_detail(response)
        except Exception as exc:
            log_event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event["status_code"] = status_code
            log_event["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            axiom.ingest(log_event)

        return response
