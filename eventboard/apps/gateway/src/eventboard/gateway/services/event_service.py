"""EventService -- 活动创建/查询/更新/删除/报名业务逻辑

每个变更操作的流程：
1. 校验字段 + 检查归属
2. （可选）上传图片，失败时不写入任何数据
3. 写入并提交
4. 重新读取并解析 created_by / attendees 引用
5. 通过 Broadcaster 广播通知
6. 返回解析后的记录
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

import aiosqlite
import structlog
from eventboard.core.broadcast import Broadcaster
from eventboard.core.exceptions import (
    AuthorizationError,
    DuplicateError,
    IntegrityError,
    NotFoundError,
    UnknownError,
    UploadError,
)
from eventboard.core.models import (
    Event,
    ImagePayload,
    NotificationType,
    ResolvedEvent,
)
from eventboard.core.ownership import is_creator
from eventboard.core.store import (
    StoreGroup,
    append_attendee,
    insert_event,
    remove_event,
    save_event_changes,
)
from eventboard.core.store.protocols import BlobUploader
from eventboard.core.validation import validate_event_changes, validate_new_event
from ulid import ULID

log = structlog.get_logger()


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """把存储层的 sqlite 异常转换为 UnknownError"""
    try:
        yield
    except aiosqlite.Error as e:
        log.error(
            "event_store_failed",
            operation=operation,
            error_type=type(e).__name__,
        )
        raise UnknownError("Storage operation failed") from e


class EventService:
    """活动业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        broadcaster: Broadcaster,
        uploader: BlobUploader | None = None,
    ) -> None:
        self._stores = store_group
        self._broadcaster = broadcaster
        self._uploader = uploader or store_group.blob_uploader

    async def create_event(
        self,
        fields: Mapping[str, Any],
        caller_id: str,
        image: ImagePayload | None = None,
    ) -> ResolvedEvent:
        """创建活动

        Args:
            fields: 原始请求字段（title/description/date/category）
            caller_id: 调用者 user_id，成为活动创建者
            image: 可选图片

        Returns:
            解析后的活动

        Raises:
            ValidationError: 必填字段缺失或格式错误
            UploadError: 图片上传失败，不创建活动
            IntegrityError: 写入后创建者无法解析（记录已保留在存储中）
        """
        draft = validate_new_event(fields)
        image_url = await self._upload(image) if image is not None else ""

        now = datetime.now(UTC)
        event = Event(
            event_id=str(ULID()),
            title=draft.title,
            description=draft.description,
            date=draft.date,
            category=draft.category,
            image_url=image_url,
            created_by=caller_id,
            attendees=[],
            created_at=now,
            updated_at=now,
        )
        with _store_errors("create"):
            await insert_event(self._stores.conn, self._stores.event_store, event)

        resolved = await self._reload_resolved(event.event_id)
        log.info("event_created", event_id=event.event_id, created_by=caller_id)

        self._broadcaster.publish(NotificationType.EVENT_CREATED, resolved.to_payload())
        return resolved

    async def list_events(self) -> list[ResolvedEvent]:
        """查询全部活动（创建者与报名者已解析）"""
        with _store_errors("list"):
            events = await self._stores.event_store.list_events()
            return [
                await self._stores.event_store.resolve_references(e) for e in events
            ]

    async def update_event(
        self,
        event_id: str,
        fields: Mapping[str, Any],
        caller_id: str,
        image: ImagePayload | None = None,
    ) -> ResolvedEvent:
        """部分更新活动（仅创建者）

        未出现在请求中的字段保持不变。

        Raises:
            NotFoundError: 活动不存在
            AuthorizationError: 调用者不是创建者
            ValidationError: 出现的字段格式错误
            UploadError: 图片上传失败，记录保持不变
            IntegrityError: 写入后创建者无法解析
        """
        event = await self._get_owned_event(event_id, caller_id)
        changes = validate_event_changes(fields)
        if changes.is_empty() and image is None:
            # 与有改动的请求一样写入，只刷新 updated_at
            log.info("event_update_without_changes", event_id=event_id)
        image_url = await self._upload(image) if image is not None else None

        updated = event.model_copy(
            update={
                "title": changes.title or event.title,
                "description": changes.description or event.description,
                "date": changes.date or event.date,
                "category": changes.category or event.category,
                "image_url": image_url if image_url is not None else event.image_url,
                "updated_at": datetime.now(UTC),
            }
        )
        with _store_errors("update"):
            await save_event_changes(self._stores.conn, self._stores.event_store, updated)

        resolved = await self._reload_resolved(event_id)
        log.info("event_updated", event_id=event_id, updated_by=caller_id)

        self._broadcaster.publish(NotificationType.EVENT_UPDATED, resolved.to_payload())
        return resolved

    async def delete_event(self, event_id: str, caller_id: str) -> dict[str, str]:
        """永久删除活动（仅创建者）

        Returns:
            确认信息 {"message": ..., "id": event_id}

        Raises:
            NotFoundError: 活动不存在
            AuthorizationError: 调用者不是创建者
        """
        await self._get_owned_event(event_id, caller_id)

        with _store_errors("delete"):
            deleted = await remove_event(
                self._stores.conn, self._stores.event_store, event_id
            )
        if not deleted:
            raise NotFoundError(event_id)

        log.info("event_deleted", event_id=event_id, deleted_by=caller_id)

        # 只广播 id，订阅方自行移除本地副本
        self._broadcaster.publish(NotificationType.EVENT_DELETED, {"id": event_id})
        return {"message": "Event deleted successfully", "id": event_id}

    async def join_event(self, event_id: str, caller_id: str) -> ResolvedEvent:
        """报名活动（任意已认证用户）

        Raises:
            NotFoundError: 活动不存在
            DuplicateError: 已经报名
            IntegrityError: 写入后创建者无法解析
        """
        event = await self._get_event(event_id)
        if caller_id in event.attendees:
            raise DuplicateError(event_id, caller_id)

        with _store_errors("join"):
            added = await append_attendee(
                self._stores.conn,
                self._stores.event_store,
                event_id,
                caller_id,
                datetime.now(UTC),
            )
        if not added:
            # 并发窗口：活动已被删除，或同一用户的另一请求先写入
            await self._get_event(event_id)
            raise DuplicateError(event_id, caller_id)

        resolved = await self._reload_resolved(event_id)
        log.info("event_joined", event_id=event_id, user_id=caller_id)

        self._broadcaster.publish(
            NotificationType.ATTENDEE_UPDATED, resolved.to_payload()
        )
        return resolved

    async def _get_event(self, event_id: str) -> Event:
        """读取活动，不存在时抛出 NotFoundError"""
        with _store_errors("get"):
            event = await self._stores.event_store.get_event(event_id)
        if event is None:
            raise NotFoundError(event_id)
        return event

    async def _get_owned_event(self, event_id: str, caller_id: str) -> Event:
        """读取活动并检查归属"""
        event = await self._get_event(event_id)
        if not is_creator(caller_id, event):
            log.warning(
                "event_not_owned",
                event_id=event_id,
                caller_id=caller_id,
            )
            raise AuthorizationError()
        return event

    async def _reload_resolved(self, event_id: str) -> ResolvedEvent:
        """重新读取并解析引用；创建者无法解析时抛出 IntegrityError"""
        with _store_errors("resolve"):
            event = await self._stores.event_store.get_event(event_id)
            resolved = (
                await self._stores.event_store.resolve_references(event)
                if event is not None
                else None
            )

        if resolved is None or resolved.created_by is None:
            log.error("event_integrity_violation", event_id=event_id)
            raise IntegrityError(event_id)
        return resolved

    async def _upload(self, image: ImagePayload) -> str:
        """上传图片；协作方的其它异常统一转换为 UploadError"""
        try:
            return await self._uploader.upload(image)
        except UploadError as e:
            log.warning("image_upload_failed", reason=e.message)
            raise
        except Exception as e:
            log.error("image_upload_failed", error_type=type(e).__name__)
            raise UploadError("Image upload failed") from e
