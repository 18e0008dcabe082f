"""Broadcaster Protocol -- 实时广播能力接口

Event Service 在构造时接收一个 Broadcaster，变更完成后通过它扇出通知。
投递为 best-effort：不确认、不重试、不缓存给之后才连接的订阅者。
"""

from typing import Any, Protocol

from .models import NotificationType


class Broadcaster(Protocol):
    """广播接口"""

    def publish(self, name: NotificationType, payload: dict[str, Any]) -> None:
        """向当前所有订阅者发送通知（不阻塞调用方）"""
        ...
