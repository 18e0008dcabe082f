"""EventStore SQLite 实现

events 表以文档形式保存活动：attendees 为 JSON 数组（报名顺序）。
created_by 一经写入不再更新；update_event 只覆盖可编辑字段。
"""

import json
from datetime import datetime

import aiosqlite

from ..models import Event, EventCategory, ResolvedEvent
from .protocols import UserStore


class SqliteEventStore:
    """EventStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection, user_store: UserStore) -> None:
        self._conn = conn
        self._user_store = user_store

    async def create_event(self, event: Event) -> None:
        """插入活动记录

        注意：此方法不自动提交事务，需由调用方管理事务。
        """
        await self._conn.execute(
            """
            INSERT INTO events (event_id, title, description, date, category,
                                image_url, created_by, attendees,
                                created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                event.event_id,
                event.title,
                event.description,
                event.date.isoformat(),
                event.category.value,
                event.image_url,
                event.created_by,
                json.dumps(event.attendees),
                event.created_at.isoformat(),
                event.updated_at.isoformat(),
            ),
        )

    async def get_event(self, event_id: str) -> Event | None:
        """根据 event_id 查询活动"""
        cursor = await self._conn.execute(
            "SELECT * FROM events WHERE event_id = ?",
            (event_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_event(row)

    async def list_events(self) -> list[Event]:
        """查询全部活动，按插入顺序"""
        cursor = await self._conn.execute("SELECT * FROM events ORDER BY rowid ASC")
        rows = await cursor.fetchall()
        return [self._row_to_event(row) for row in rows]

    async def update_event(self, event: Event) -> None:
        """覆盖写入可编辑字段（title/description/date/category/image_url）"""
        await self._conn.execute(
            """
            UPDATE events
            SET title = ?, description = ?, date = ?, category = ?,
                image_url = ?, updated_at = ?
            WHERE event_id = ?
            """,
            (
                event.title,
                event.description,
                event.date.isoformat(),
                event.category.value,
                event.image_url,
                event.updated_at.isoformat(),
                event.event_id,
            ),
        )

    async def delete_event(self, event_id: str) -> bool:
        """永久删除活动

        Returns:
            True 如果删除了一条记录
        """
        cursor = await self._conn.execute(
            "DELETE FROM events WHERE event_id = ?",
            (event_id,),
        )
        return cursor.rowcount > 0

    async def add_attendee(
        self, event_id: str, user_id: str, updated_at: datetime
    ) -> bool:
        """追加报名者

        追加与去重在同一条 UPDATE 中完成，并发重复报名也只会写入一次。

        Returns:
            True 如果写入成功；False 表示已报名或活动不存在
        """
        cursor = await self._conn.execute(
            """
            UPDATE events
            SET attendees = json_insert(attendees, '$[#]', ?),
                updated_at = ?
            WHERE event_id = ?
              AND NOT EXISTS (
                  SELECT 1 FROM json_each(events.attendees)
                  WHERE json_each.value = ?
              )
            """,
            (user_id, updated_at.isoformat(), event_id, user_id),
        )
        return cursor.rowcount > 0

    async def resolve_references(self, event: Event) -> ResolvedEvent:
        """把 created_by / attendees 解析为 {id, name, email} 投影

        已不存在的报名者被丢弃；创建者不存在时 created_by 为 None。
        """
        summaries = await self._user_store.get_summaries(
            [event.created_by, *event.attendees]
        )
        return ResolvedEvent(
            event_id=event.event_id,
            title=event.title,
            description=event.description,
            date=event.date,
            category=event.category,
            image_url=event.image_url,
            created_by=summaries.get(event.created_by),
            attendees=[summaries[a] for a in event.attendees if a in summaries],
            created_at=event.created_at,
            updated_at=event.updated_at,
        )

    @staticmethod
    def _row_to_event(row: aiosqlite.Row) -> Event:
        """将数据库行转换为 Event 模型"""
        attendees = json.loads(row[7]) if row[7] else []
        return Event(
            event_id=row[0],
            title=row[1],
            description=row[2],
            date=datetime.fromisoformat(row[3]),
            category=EventCategory(row[4]),
            image_url=row[5],
            created_by=row[6],
            attendees=attendees,
            created_at=datetime.fromisoformat(row[8]),
            updated_at=datetime.fromisoformat(row[9]),
        )
