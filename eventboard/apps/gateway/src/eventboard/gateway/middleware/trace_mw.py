"""TraceMiddleware -- 为单个活动的操作绑定 event_id

/api/events/{event_id} 及其子路由（如 /join）的日志都带上 event_id。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

_EVENT_ID_LENGTH = 26  # ULID 长度


def extract_event_id(path: str) -> str | None:
    """从 /api/events/{event_id}[/...] 中提取 event_id"""
    parts = [p for p in path.split("/") if p]
    for i, part in enumerate(parts[:-1]):
        if part == "events" and len(parts[i + 1]) == _EVENT_ID_LENGTH:
            return parts[i + 1]
    return None


class TraceMiddleware(BaseHTTPMiddleware):
    """活动级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        event_id = extract_event_id(request.url.path)
        if event_id:
            structlog.contextvars.bind_contextvars(event_id=event_id)

        return await call_next(request)
