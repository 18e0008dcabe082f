"""FastAPI lifespan 测试

测试内容：
1. 启动时 DB / uploads 目录初始化，EventHub 与身份校验器就绪
2. 关闭时连接清理
"""

from pathlib import Path

import pytest
from eventboard.gateway.auth import JWTIdentityVerifier
from eventboard.gateway.services.event_hub import EventHub


class TestLifespan:
    """Lifespan 测试"""

    async def test_startup_and_shutdown(self, tmp_path: Path, monkeypatch):
        db_path = tmp_path / "sqlite" / "life.db"
        uploads_dir = tmp_path / "uploads"
        monkeypatch.setenv("EVENTBOARD_DB_PATH", str(db_path))
        monkeypatch.setenv("EVENTBOARD_UPLOADS_DIR", str(uploads_dir))
        monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

        from eventboard.gateway.main import create_app, lifespan

        app = create_app()

        async with lifespan(app):
            assert db_path.exists()
            assert uploads_dir.is_dir()
            assert isinstance(app.state.event_hub, EventHub)
            assert isinstance(app.state.identity_verifier, JWTIdentityVerifier)

            cursor = await app.state.store_group.conn.execute("SELECT 1")
            assert (await cursor.fetchone())[0] == 1

        # 关闭后连接不可用
        with pytest.raises(ValueError):
            await app.state.store_group.conn.execute("SELECT 1")

    async def test_test_app_state(self, test_app):
        """测试 app 的 Store 实例组正确初始化"""
        assert test_app.state.store_group is not None
        assert test_app.state.store_group.conn is not None
        assert test_app.state.event_hub is not None
