"""LoggingMiddleware -- 访问日志与 request_id

客户端带来的 X-Request-ID 在格式合法时沿用，便于跨服务串联；否则生成 ULID。
每个请求结束后只写一条访问日志，级别随状态码变化：
5xx 为 error，4xx 为 warning，探活路径为 debug，其余为 info。
"""

import logging
import re
import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

# 只接受短的可打印标识，避免日志被注入换行或超长内容
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]{1,64}")

_PROBE_PATHS = frozenset({"/health", "/ready"})

log = structlog.get_logger()


def resolve_request_id(request: Request) -> str:
    """沿用合法的客户端 request_id，否则生成新的 ULID"""
    incoming = request.headers.get(REQUEST_ID_HEADER)
    if incoming and _VALID_REQUEST_ID.fullmatch(incoming):
        return incoming
    return str(ULID())


def access_log_level(path: str, status_code: int) -> int:
    """按状态码和路径选择访问日志级别"""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    if path in _PROBE_PATHS:
        return logging.DEBUG
    return logging.INFO


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            await log.aexception("request_failed", duration_ms=_elapsed_ms(started))
            raise

        await log.alog(
            access_log_level(request.url.path, response.status_code),
            "request_handled",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
            client=request.client.host if request.client else None,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
