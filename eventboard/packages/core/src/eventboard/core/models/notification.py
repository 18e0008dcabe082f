"""Notification Model -- 实时广播消息"""

from typing import Any

from pydantic import BaseModel, Field

from .enums import NotificationType


class Notification(BaseModel):
    """一次变更对应的一条广播消息

    payload 为解析后的活动；eventDeleted 时仅包含被删除的 id。
    """

    notification_id: str = Field(description="ULID，作为 SSE id")
    name: NotificationType = Field(description="通知名")
    payload: dict[str, Any] = Field(default_factory=dict)
