"""SSE 通知流路由

GET /api/stream/events: 订阅全部活动变更通知。
连接建立后才会收到通知（无历史回放），空闲时发送心跳注释保活。
"""

import asyncio
import json
from collections.abc import AsyncIterator

import structlog
from eventboard.core.config import SSE_HEARTBEAT_INTERVAL
from fastapi import APIRouter, Depends
from sse_starlette.sse import EventSourceResponse

from ..deps import get_event_hub
from ..services.event_hub import EventHub

log = structlog.get_logger()

router = APIRouter()


async def notification_stream(
    event_hub: EventHub,
    heartbeat_interval: float = SSE_HEARTBEAT_INTERVAL,
) -> AsyncIterator[dict]:
    """把 EventHub 的通知转换为 SSE 消息

    每条通知对应一条 SSE 消息：event=通知名，id=通知 ID，data=JSON payload。
    订阅因队列写满被移除时，发完已缓冲的通知后结束流，由客户端重连。
    """
    queue = await event_hub.subscribe()
    log.info("stream_client_connected", subscribers=event_hub.subscriber_count)
    try:
        while True:
            if event_hub.is_dropped(queue) and queue.empty():
                log.info("stream_closed_after_drop")
                return
            try:
                notification = await asyncio.wait_for(
                    queue.get(), timeout=heartbeat_interval
                )
                yield {
                    "id": notification.notification_id,
                    "event": notification.name.value,
                    "data": json.dumps(notification.payload, ensure_ascii=False),
                }
            except TimeoutError:
                # 心跳保活
                yield {"comment": "heartbeat"}
    finally:
        await event_hub.unsubscribe(queue)
        log.info("stream_client_disconnected", subscribers=event_hub.subscriber_count)


@router.get("/api/stream/events")
async def stream_events(event_hub=Depends(get_event_hub)):
    """SSE 通知流端点"""
    return EventSourceResponse(notification_stream(event_hub))
