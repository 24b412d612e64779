"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data and sends structured logs to Axiom.
Logs: endpoint, method, body/params, status code, error reason, and the
ledger identifiers (worker, block, row) as top-level fields so check-in and
check-out activity can be filtered per worker or per row.
"""

import asyncio
import time
import json
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from axiom_py import Client as AxiomClient

from harvest_ledger.config import settings

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 최상위 필드로 승격할 원장 식별자 — Ledger identifiers lifted to top-level fields
# (wire name -> log field)
_LEDGER_KEYS: dict[str, str] = {
    "workerID": "worker_id",
    "worker_id": "worker_id",
    "blockName": "block_name",
    "block_name": "block_name",
    "rowNumber": "row_number",
    "row_number": "row_number",
}


def _truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 — Truncate large values to prevent oversized logs."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


def _ledger_fields(*sources: dict[str, Any] | None) -> dict[str, Any]:
    """요청 본문/경로/쿼리에서 원장 식별자를 추출합니다.

    Extract worker/block/row identifiers from body, path and query params.
    Earlier sources win.
    """
    fields: dict[str, Any] = {}
    for source in sources:
        if not isinstance(source, dict):
            continue
        for key, field in _LEDGER_KEYS.items():
            if key in source and field not in fields:
                fields[field] = source[key]
    return fields


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs all API requests and responses to Axiom.
    Passes requests straight through when Axiom is not configured.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 스킵 — Skip excluded paths
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        # Axiom 미설정시 패스스루 — Pass through if Axiom not configured
        if not self._client:
            return await call_next(request)

        start_time = time.time()

        # 요청 데이터 수집 — Collect request data
        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None

        # Request body 읽기 — Read request body (only for methods with body)
        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            try:
                body_bytes = await request.body()
                if body_bytes:
                    request_body = _truncate(json.loads(body_bytes))
            except (json.JSONDecodeError, UnicodeDecodeError):
                request_body = "(non-json body)"

        # 응답 처리 — Process response
        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    if isinstance(chunk, bytes):
                        resp_body += chunk
                    else:
                        resp_body += chunk.encode("utf-8")

                try:
                    error_data = json.loads(resp_body)
                    error_detail = error_data.get("detail", str(error_data))
                    if isinstance(error_detail, str) and len(error_detail) > 500:
                        error_detail = error_detail[:500] + "..."
                except (json.JSONDecodeError, UnicodeDecodeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")[:500]

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            duration_ms = round((time.time() - start_time) * 1000, 2)
            path_params = dict(request.path_params) if request.path_params else None

            # Axiom 로그 이벤트 구성 — Build Axiom log event
            log_event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": duration_ms,
            }
            log_event.update(_ledger_fields(request_body, path_params, query_params))

            if query_params:
                log_event["query_params"] = query_params
            if path_params:
                log_event["path_params"] = path_params
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail

            # Axiom 전송 (스레드에서 ingest) — Blocking HTTP call runs off the event loop
            try:
                await asyncio.to_thread(self._client.ingest_events, self._dataset, [log_event])
            except Exception:
                pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break request on log failure

        return response
