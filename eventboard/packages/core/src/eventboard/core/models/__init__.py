"""EventBoard Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import EventCategory, NotificationType
from .event import Event, EventChanges, EventDraft, ImagePayload, ResolvedEvent
from .notification import Notification
from .user import User, UserSummary

__all__ = [
    # 枚举
    "EventCategory",
    "NotificationType",
    # Event
    "Event",
    "EventDraft",
    "EventChanges",
    "ImagePayload",
    "ResolvedEvent",
    # User
    "User",
    "UserSummary",
    # Notification
    "Notification",
]
