"""EventHub -- 内存中通知广播器

每个订阅者持有一个 asyncio.Queue，支持 subscribe/unsubscribe/publish。
publish 使用 put_nowait，不阻塞调用方；队列写满的订阅者被移除并标记为 dropped，
由消费方读完剩余通知后断开，客户端重连后重新订阅。
之后才连接的订阅者收不到之前的通知（无回放、无缓冲）。
"""

import asyncio
from typing import Any

import structlog
from eventboard.core.config import SSE_QUEUE_MAXSIZE
from eventboard.core.models import Notification, NotificationType
from ulid import ULID

log = structlog.get_logger()


class EventHub:
    """通知广播器 -- 基于 asyncio.Queue 的发布/订阅模式"""

    def __init__(self, queue_maxsize: int = SSE_QUEUE_MAXSIZE) -> None:
        self._subscribers: set[asyncio.Queue] = set()
        # 因写满被移除、尚未由消费方取消订阅的队列
        self._dropped: set[asyncio.Queue] = set()
        self._queue_maxsize = queue_maxsize

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def subscribe(self) -> asyncio.Queue:
        """订阅通知流

        Returns:
            asyncio.Queue 实例，新通知会被推送到此队列
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_maxsize)
        self._subscribers.add(queue)
        return queue

    async def unsubscribe(self, queue: asyncio.Queue) -> None:
        """取消订阅

        Args:
            queue: 之前订阅时返回的队列
        """
        self._subscribers.discard(queue)
        self._dropped.discard(queue)

    def is_dropped(self, queue: asyncio.Queue) -> bool:
        """队列是否已因写满被移除；消费方读完剩余通知后应断开连接"""
        return queue in self._dropped

    def publish(self, name: NotificationType, payload: dict[str, Any]) -> None:
        """向当前所有订阅者广播通知

        Args:
            name: 通知名
            payload: 解析后的活动，或 eventDeleted 时的 {"id": ...}
        """
        notification = Notification(
            notification_id=str(ULID()),
            name=name,
            payload=payload,
        )
        dead_queues = []
        for queue in self._subscribers:
            try:
                queue.put_nowait(notification)
            except asyncio.QueueFull:
                dead_queues.append(queue)

        # 清理已满的队列
        for q in dead_queues:
            self._subscribers.discard(q)
            self._dropped.add(q)
            log.warning("subscriber_dropped", reason="queue_full")

        log.debug(
            "notification_published",
            notification=name.value,
            subscribers=len(self._subscribers),
        )
