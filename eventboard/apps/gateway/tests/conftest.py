"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient + token fixture"""

from collections.abc import AsyncGenerator, Callable
from datetime import timedelta
from pathlib import Path

import pytest
import pytest_asyncio
from eventboard.core.store import StoreGroup
from eventboard.gateway.auth import JWTIdentityVerifier, create_access_token
from eventboard.gateway.config import GatewayConfig
from eventboard.gateway.services.event_hub import EventHub
from httpx import ASGITransport, AsyncClient

TEST_JWT_SECRET = "eventboard-test-secret-0123456789abcdef"


@pytest.fixture
def gateway_config() -> GatewayConfig:
    """测试用 Gateway 配置"""
    return GatewayConfig(jwt_secret=TEST_JWT_SECRET)


@pytest.fixture
def token_for(gateway_config: GatewayConfig) -> Callable[..., str]:
    """签发测试 token"""

    def _token_for(user_id: str, expires_in: timedelta | None = None) -> str:
        return create_access_token(user_id, gateway_config, expires_in=expires_in)

    return _token_for


@pytest.fixture
def auth_headers(token_for) -> Callable[[str], dict[str, str]]:
    """构造 Authorization 头"""

    def _auth_headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_for(user_id)}"}

    return _auth_headers


@pytest_asyncio.fixture
async def test_app(
    store_group: StoreGroup,
    tmp_uploads_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
):
    """创建完整 app，手动初始化 lifespan 状态"""
    monkeypatch.setenv("EVENTBOARD_UPLOADS_DIR", str(tmp_uploads_dir))
    monkeypatch.setenv("EVENTBOARD_JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from eventboard.gateway.main import create_app

    app = create_app()

    # 手动初始化（绕过 lifespan）
    app.state.store_group = store_group
    app.state.event_hub = EventHub()
    app.state.identity_verifier = JWTIdentityVerifier.from_config(
        app.state.gateway_config
    )

    yield app


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
