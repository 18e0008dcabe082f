"""Store Protocol 接口定义

定义 EventStore、UserStore、BlobUploader 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from datetime import datetime
from typing import Protocol

from ..models import Event, ImagePayload, ResolvedEvent, User, UserSummary


class EventStore(Protocol):
    """Event 存储接口

    写操作不自动提交，事务由调用方（transaction 模块）管理。
    """

    async def create_event(self, event: Event) -> None:
        """插入活动记录"""
        ...

    async def get_event(self, event_id: str) -> Event | None:
        """根据 event_id 查询活动"""
        ...

    async def list_events(self) -> list[Event]:
        """查询全部活动（插入顺序）"""
        ...

    async def update_event(self, event: Event) -> None:
        """覆盖写入可编辑字段（last write wins）"""
        ...

    async def delete_event(self, event_id: str) -> bool:
        """永久删除活动，返回是否删除了记录"""
        ...

    async def add_attendee(
        self, event_id: str, user_id: str, updated_at: datetime
    ) -> bool:
        """追加报名者；已存在时不写入并返回 False"""
        ...

    async def resolve_references(self, event: Event) -> ResolvedEvent:
        """把 created_by / attendees 解析为用户投影"""
        ...


class UserStore(Protocol):
    """User 存储接口（只读投影 + 运维写入）"""

    async def create_user(self, user: User) -> None:
        """创建用户记录"""
        ...

    async def get_user(self, user_id: str) -> User | None:
        """根据 user_id 查询用户"""
        ...

    async def list_users(self) -> list[User]:
        """查询全部用户"""
        ...

    async def get_summaries(self, user_ids: list[str]) -> dict[str, UserSummary]:
        """批量查询用户投影，返回 user_id -> UserSummary"""
        ...


class BlobUploader(Protocol):
    """图片上传接口"""

    async def upload(self, image: ImagePayload) -> str:
        """上传图片并返回持久 URL

        Raises:
            UploadError: 上传失败
        """
        ...
