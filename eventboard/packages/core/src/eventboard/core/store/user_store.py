"""UserStore SQLite 实现

活动核心只读取用户投影；create_user 供 CLI 和测试准备数据。
"""

from datetime import datetime

import aiosqlite

from ..models import User, UserSummary


class SqliteUserStore:
    """UserStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_user(self, user: User) -> None:
        """创建用户记录

        注意：此方法不自动提交事务，需由调用方管理事务。
        """
        await self._conn.execute(
            """
            INSERT INTO users (user_id, name, email, created_at)
            VALUES (?, ?, ?, ?)
            """,
            (
                user.user_id,
                user.name,
                user.email,
                user.created_at.isoformat(),
            ),
        )

    async def get_user(self, user_id: str) -> User | None:
        """根据 user_id 查询用户"""
        cursor = await self._conn.execute(
            "SELECT * FROM users WHERE user_id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    async def list_users(self) -> list[User]:
        """查询全部用户，按创建时间正序"""
        cursor = await self._conn.execute(
            "SELECT * FROM users ORDER BY created_at ASC"
        )
        rows = await cursor.fetchall()
        return [self._row_to_user(row) for row in rows]

    async def get_summaries(self, user_ids: list[str]) -> dict[str, UserSummary]:
        """批量查询用户投影 {id, name, email}

        不存在的 user_id 不会出现在返回结果中。
        """
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return {}
        placeholders = ", ".join("?" for _ in unique_ids)
        cursor = await self._conn.execute(
            f"SELECT user_id, name, email FROM users WHERE user_id IN ({placeholders})",
            unique_ids,
        )
        rows = await cursor.fetchall()
        return {
            row[0]: UserSummary(id=row[0], name=row[1], email=row[2]) for row in rows
        }

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        """将数据库行转换为 User 模型"""
        return User(
            user_id=row[0],
            name=row[1],
            email=row[2],
            created_at=datetime.fromisoformat(row[3]),
        )
