"""GatewayConfig -- Gateway 配置加载

从环境变量加载身份校验、媒体 URL 与 CORS 配置。
"""

import os
from typing import Literal

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()


class GatewayConfig(BaseModel):
    """Gateway 配置 -- 从环境变量加载

    环境变量:
        EVENTBOARD_JWT_SECRET: JWT 签名密钥
        EVENTBOARD_JWT_ALGORITHM: JWT 算法（默认 HS256）
        EVENTBOARD_TOKEN_TTL_MINUTES: 签发 token 的有效期（分钟，默认 60）
        EVENTBOARD_MEDIA_BASE_URL: 上传图片的 URL 前缀（默认 /media）
        EVENTBOARD_CORS_ORIGINS: 允许的跨域来源，逗号分隔（默认 *）
    """

    jwt_secret: SecretStr = Field(
        default=SecretStr("change-me-eventboard-development-secret"),
        description="JWT 签名密钥",
    )
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        description="JWT 签名算法",
    )
    token_ttl_minutes: int = Field(
        default=60,
        ge=1,
        description="签发 token 有效期（分钟）",
    )
    media_base_url: str = Field(default="/media", description="图片 URL 前缀")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="允许的跨域来源",
    )


def load_gateway_config() -> GatewayConfig:
    """从环境变量加载 Gateway 配置

    Returns:
        GatewayConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("EVENTBOARD_JWT_SECRET"):
        kwargs["jwt_secret"] = SecretStr(val)

    if val := os.environ.get("EVENTBOARD_JWT_ALGORITHM"):
        kwargs["jwt_algorithm"] = val

    if val := os.environ.get("EVENTBOARD_TOKEN_TTL_MINUTES"):
        try:
            kwargs["token_ttl_minutes"] = int(val)
        except ValueError:
            log.warning(
                "invalid_token_ttl_config",
                env_var="EVENTBOARD_TOKEN_TTL_MINUTES",
                value=val,
                fallback=60,
            )
            # 使用默认值，不阻塞启动

    if val := os.environ.get("EVENTBOARD_MEDIA_BASE_URL"):
        kwargs["media_base_url"] = val

    if val := os.environ.get("EVENTBOARD_CORS_ORIGINS"):
        kwargs["cors_origins"] = [o.strip() for o in val.split(",") if o.strip()]

    return GatewayConfig(**kwargs)
