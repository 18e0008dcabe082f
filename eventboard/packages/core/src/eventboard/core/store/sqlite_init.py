"""SQLite 数据库初始化

PRAGMA 配置 + users/events 两张表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# users 表 DDL
_USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    user_id     TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    email       TEXT NOT NULL,
    created_at  TEXT NOT NULL
);
"""

_USERS_INDEXES = [
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_users_email ON users(email);",
]

# events 表 DDL
# created_by 不设外键：创建者悬空时由引用解析检测并报告 IntegrityError
_EVENTS_DDL = """
CREATE TABLE IF NOT EXISTS events (
    event_id     TEXT PRIMARY KEY,
    title        TEXT NOT NULL,
    description  TEXT NOT NULL,
    date         TEXT NOT NULL,
    category     TEXT NOT NULL
                 CHECK (category IN ('Conference', 'Workshop', 'Meetup')),
    image_url    TEXT NOT NULL DEFAULT '',
    created_by   TEXT NOT NULL,
    attendees    TEXT NOT NULL DEFAULT '[]',
    created_at   TEXT NOT NULL,
    updated_at   TEXT NOT NULL
);
"""

_EVENTS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_events_created_by ON events(created_by);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    await conn.execute(_USERS_DDL)
    await conn.execute(_EVENTS_DDL)

    for idx_sql in _USERS_INDEXES + _EVENTS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
