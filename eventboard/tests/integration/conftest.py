"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from eventboard.core.store import StoreGroup
from eventboard.gateway.auth import JWTIdentityVerifier, create_access_token
from eventboard.gateway.services.event_hub import EventHub
from httpx import ASGITransport, AsyncClient

INTEGRATION_JWT_SECRET = "eventboard-integration-secret-0123456789"


@pytest_asyncio.fixture
async def integration_app(
    store_group: StoreGroup,
    tmp_uploads_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
):
    """集成测试用 FastAPI app"""
    monkeypatch.setenv("EVENTBOARD_UPLOADS_DIR", str(tmp_uploads_dir))
    monkeypatch.setenv("EVENTBOARD_JWT_SECRET", INTEGRATION_JWT_SECRET)
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from eventboard.gateway.main import create_app

    app = create_app()

    app.state.store_group = store_group
    app.state.event_hub = EventHub()
    app.state.identity_verifier = JWTIdentityVerifier.from_config(
        app.state.gateway_config
    )

    yield app


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def auth_headers(integration_app) -> Callable[[str], dict[str, str]]:
    """使用 app 自身配置签发 token"""

    def _auth_headers(user_id: str) -> dict[str, str]:
        token = create_access_token(user_id, integration_app.state.gateway_config)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
