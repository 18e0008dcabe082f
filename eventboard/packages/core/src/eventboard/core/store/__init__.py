"""EventBoard Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

from pathlib import Path

import aiosqlite

from ..config import MAX_IMAGE_BYTES
from .blob_store import LocalBlobUploader
from .event_store import SqliteEventStore
from .sqlite_init import init_db
from .transaction import (
    append_attendee,
    insert_event,
    insert_user,
    remove_event,
    save_event_changes,
)
from .user_store import SqliteUserStore


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(
        self,
        conn: aiosqlite.Connection,
        uploads_dir: Path,
        media_base_url: str = "/media",
        max_image_bytes: int = MAX_IMAGE_BYTES,
    ) -> None:
        self.conn = conn
        self.user_store = SqliteUserStore(conn)
        self.event_store = SqliteEventStore(conn, self.user_store)
        self.blob_uploader = LocalBlobUploader(
            uploads_dir,
            media_base_url=media_base_url,
            max_bytes=max_image_bytes,
        )


async def create_store_group(
    db_path: str,
    uploads_dir: str | Path,
    media_base_url: str = "/media",
    max_image_bytes: int = MAX_IMAGE_BYTES,
) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径
        uploads_dir: 图片文件存储目录
        media_base_url: 图片 URL 前缀
        max_image_bytes: 单张图片大小上限

    Returns:
        StoreGroup 实例
    """
    uploads_path = Path(uploads_dir)
    uploads_path.mkdir(parents=True, exist_ok=True)

    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await init_db(conn)

    return StoreGroup(
        conn=conn,
        uploads_dir=uploads_path,
        media_base_url=media_base_url,
        max_image_bytes=max_image_bytes,
    )


__all__ = [
    "StoreGroup",
    "create_store_group",
    "SqliteEventStore",
    "SqliteUserStore",
    "LocalBlobUploader",
    "init_db",
    "insert_event",
    "save_event_changes",
    "remove_event",
    "append_attendee",
    "insert_user",
]
