"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + EventHub + 身份校验器初始化 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from eventboard.core.config import MAX_IMAGE_BYTES, get_db_path, get_uploads_dir
from eventboard.core.store import create_store_group
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .auth import JWTIdentityVerifier
from .config import load_gateway_config
from .errors import register_error_handlers
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import events, health, stream
from .services.event_hub import EventHub

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 Store 和 EventHub，关闭时清理连接"""
    config = app.state.gateway_config

    store_group = await create_store_group(
        get_db_path(),
        get_uploads_dir(),
        media_base_url=config.media_base_url,
        max_image_bytes=MAX_IMAGE_BYTES,
    )
    app.state.store_group = store_group
    app.state.event_hub = EventHub()
    app.state.identity_verifier = JWTIdentityVerifier.from_config(config)

    log.info(
        "gateway_started",
        db_path=get_db_path(),
        uploads_dir=str(get_uploads_dir()),
    )

    yield

    # 关闭：清理数据库连接
    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()
    log.info("gateway_stopped")


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    config = load_gateway_config()

    app = FastAPI(
        title="EventBoard Gateway",
        version="0.1.0",
        description="EventBoard 活动管理与实时通知 API",
        lifespan=lifespan,
    )
    app.state.gateway_config = config

    # 注册中间件（顺序：先 Trace 后 Logging，Logging 位于最外层）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 初始化日志
    setup_logging()
    setup_logfire()

    register_error_handlers(app)

    # 注册路由
    app.include_router(events.router, tags=["events"])
    app.include_router(stream.router, tags=["stream"])
    app.include_router(health.router, tags=["health"])

    # 上传图片静态访问（media_base_url 为外部地址时由外部服务提供）
    # uploads 目录在 lifespan 中创建
    if config.media_base_url.startswith("/"):
        app.mount(
            config.media_base_url.rstrip("/"),
            StaticFiles(directory=str(get_uploads_dir()), check_dir=False),
            name="media",
        )

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
