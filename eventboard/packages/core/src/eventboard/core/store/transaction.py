"""活动写入事务封装

每个写操作在同一连接上执行后立即提交；失败时回滚并重新抛出，
调用方看到的要么是完整写入，要么是原记录。
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

import aiosqlite

from ..models import Event, User
from .protocols import EventStore, UserStore


@asynccontextmanager
async def _committing(conn: aiosqlite.Connection) -> AsyncIterator[None]:
    """代码块正常结束时提交，抛出异常时回滚"""
    try:
        yield
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise


async def insert_event(
    conn: aiosqlite.Connection,
    event_store: EventStore,
    event: Event,
) -> None:
    """插入活动并提交

    Args:
        conn: 数据库连接（需与 event_store 使用同一连接）
        event_store: EventStore 实例
        event: 要写入的活动
    """
    async with _committing(conn):
        await event_store.create_event(event)


async def save_event_changes(
    conn: aiosqlite.Connection,
    event_store: EventStore,
    event: Event,
) -> None:
    """覆盖写入活动的可编辑字段并提交"""
    async with _committing(conn):
        await event_store.update_event(event)


async def remove_event(
    conn: aiosqlite.Connection,
    event_store: EventStore,
    event_id: str,
) -> bool:
    """永久删除活动并提交

    Returns:
        True 如果删除了一条记录
    """
    async with _committing(conn):
        return await event_store.delete_event(event_id)


async def append_attendee(
    conn: aiosqlite.Connection,
    event_store: EventStore,
    event_id: str,
    user_id: str,
    updated_at: datetime,
) -> bool:
    """追加报名者并提交

    Returns:
        True 如果写入成功；False 表示已报名或活动不存在
    """
    async with _committing(conn):
        return await event_store.add_attendee(event_id, user_id, updated_at)


async def insert_user(
    conn: aiosqlite.Connection,
    user_store: UserStore,
    user: User,
) -> None:
    """创建用户并提交

    Raises:
        aiosqlite.IntegrityError: 邮箱已存在
    """
    async with _committing(conn):
        await user_store.create_user(user)
