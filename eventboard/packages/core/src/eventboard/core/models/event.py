"""Event Domain Model

created_by 在创建时设置，之后不可修改，唯一决定编辑/删除权限。
attendees 按报名顺序排列，同一 user_id 只出现一次。
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .enums import EventCategory
from .user import UserSummary


class Event(BaseModel):
    """Event 数据模型（存储形态，引用为 user_id）"""

    event_id: str = Field(description="唯一标识，ULID 格式")
    title: str = Field(description="标题")
    description: str = Field(description="描述")
    date: datetime = Field(description="活动时间")
    category: EventCategory = Field(description="活动分类")
    image_url: str = Field(default="", description="图片 URL，无图片时为空串")
    created_by: str = Field(description="创建者 user_id")
    attendees: list[str] = Field(default_factory=list, description="报名者 user_id 列表")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")


class EventDraft(BaseModel):
    """创建活动时经过校验的字段"""

    title: str
    description: str
    date: datetime
    category: EventCategory


class EventChanges(BaseModel):
    """部分更新字段 -- None 表示保持不变，不会清空"""

    title: str | None = None
    description: str | None = None
    date: datetime | None = None
    category: EventCategory | None = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.title, self.description, self.date, self.category)
        )


class ImagePayload(BaseModel):
    """待上传的图片内容"""

    filename: str = Field(default="", description="原始文件名")
    content_type: str = Field(default="application/octet-stream", description="MIME 类型")
    data: bytes = Field(description="图片字节")


class ResolvedEvent(BaseModel):
    """引用解析后的活动

    created_by 为 None 表示创建者无法解析（数据不一致）。
    attendees 中已不存在的用户会被丢弃。
    """

    event_id: str
    title: str
    description: str
    date: datetime
    category: EventCategory
    image_url: str = ""
    created_by: UserSummary | None = None
    attendees: list[UserSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    def to_payload(self) -> dict[str, Any]:
        """转换为对外 JSON 结构（HTTP 响应与实时广播共用）"""
        return {
            "id": self.event_id,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat(),
            "category": self.category.value,
            "imageUrl": self.image_url,
            "createdBy": self.created_by.model_dump() if self.created_by else None,
            "attendees": [a.model_dump() for a in self.attendees],
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
