"""全局 pytest 配置 -- 临时 SQLite 数据库 + 用户数据 fixture"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest_asyncio
from eventboard.core.models import User
from eventboard.core.store import StoreGroup, create_store_group, insert_user
from ulid import ULID


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest_asyncio.fixture
async def tmp_uploads_dir(tmp_path: Path) -> Path:
    """提供临时 uploads 目录"""
    uploads_dir = tmp_path / "uploads"
    uploads_dir.mkdir(parents=True, exist_ok=True)
    return uploads_dir


@pytest_asyncio.fixture
async def store_group(
    tmp_db_path: Path, tmp_uploads_dir: Path
) -> AsyncGenerator[StoreGroup, None]:
    """提供已初始化的 StoreGroup"""
    group = await create_store_group(str(tmp_db_path), tmp_uploads_dir)
    yield group
    await group.conn.close()


@pytest_asyncio.fixture
async def make_user(store_group: StoreGroup) -> Callable[..., Awaitable[User]]:
    """用户工厂：写入 users 表并返回 User"""

    async def _make_user(name: str = "Alice", email: str | None = None) -> User:
        user = User(
            user_id=str(ULID()),
            name=name,
            email=email or f"{name.lower()}-{ULID()}@example.com",
            created_at=datetime.now(UTC),
        )
        await insert_user(store_group.conn, store_group.user_store, user)
        return user

    return _make_user
