"""Axiom 요청 로깅 미들웨어.

Axiom request logging middleware.
Each API call becomes one structured event: method, path, params, masked
request body, status code, latency and (for 4xx/5xx) the error detail.
Credentials in bodies and query strings (password, tokens) are masked
before anything leaves the process.

AXIOM_API_TOKEN / AXIOM_DATASET이 없으면 아무 일도 하지 않습니다
(Without Axiom settings the middleware is a pass-through).
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from parkspot.config import settings

_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|credential)",
    re.IGNORECASE,
)

_SKIP_PATHS: set[str] = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_DEPTH: int = 5
_MAX_ITEMS: int = 20
_MAX_DETAIL: int = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 재귀 마스킹 — Replace credential-like values with "***"."""
    if depth > _MAX_DEPTH:
        return "..."
    if isinstance(data, dict):
        return {
            key: "***" if _SENSITIVE_KEYS.search(str(key)) else mask_sensitive(value, depth + 1)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:_MAX_ITEMS]]
    return data


def extract_error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유 추출 — Pull "detail" out of an error response body."""
    try:
        payload: Any = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:_MAX_DETAIL]

    detail: Any = payload.get("detail", payload) if isinstance(payload, dict) else payload
    text: str = detail if isinstance(detail, str) else json.dumps(detail, default=str)
    if len(text) > _MAX_DETAIL:
        return text[:_MAX_DETAIL] + "..."
    return text


async def _read_json_body(request: Request) -> Any:
    raw: bytes = await request.body()
    if not raw:
        return None
    try:
        return mask_sensitive(json.loads(raw))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom 데이터셋에 전송하는 미들웨어.

    Ships one event per request to the configured Axiom dataset.
    A client can be injected for tests; otherwise one is built from settings.
    """

    def __init__(
        self,
        app: Any,
        client: AxiomClient | None = None,
        dataset: str | None = None,
    ) -> None:
        super().__init__(app)
        self._dataset: str = dataset or settings.AXIOM_DATASET
        self._client: AxiomClient | None = client
        if self._client is None and settings.AXIOM_API_TOKEN and self._dataset:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        started: float = time.perf_counter()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
        }
        if request.query_params:
            event["query_params"] = mask_sensitive(dict(request.query_params))
        if request.method in ("POST", "PUT", "PATCH"):
            body: Any = await _read_json_body(request)
            if body is not None:
                event["request_body"] = body

        status_code: int = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code

            if status_code >= 400:
                # 본문을 소비했으므로 새 응답으로 다시 감쌈 (Body is consumed, re-wrap it)
                content: bytes = b""
                async for chunk in response.body_iterator:
                    content += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                event["error"] = extract_error_detail(content)
                response = Response(
                    content=content,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["status_code"] = status_code
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            try:
                self._client.ingest_events(self._dataset, [event])
            except Exception:
                pass  # 로깅 실패가 요청 처리를 깨뜨리지 않도록 (Never fail a request on log errors)

        return response
