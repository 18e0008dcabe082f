"""枚举定义

EventCategory 为活动分类的固定集合；NotificationType 为实时广播的四种通知名。
"""

from enum import StrEnum


class EventCategory(StrEnum):
    """活动分类 -- 固定枚举，创建时必填"""

    CONFERENCE = "Conference"
    WORKSHOP = "Workshop"
    MEETUP = "Meetup"


class NotificationType(StrEnum):
    """实时通知名称"""

    EVENT_CREATED = "eventCreated"
    EVENT_UPDATED = "eventUpdated"
    EVENT_DELETED = "eventDeleted"
    ATTENDEE_UPDATED = "attendeeUpdated"
