"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store / EventHub / 身份校验

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from eventboard.core.store import StoreGroup
from fastapi import Depends, Request

from .auth import JWTIdentityVerifier
from .config import load_gateway_config
from .services.event_hub import EventHub


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_event_hub(request: Request) -> EventHub:
    """从 app.state 获取 EventHub 实例"""
    return request.app.state.event_hub


def get_identity_verifier(request: Request) -> JWTIdentityVerifier:
    """从 app.state 获取身份校验器，未初始化时按环境变量配置创建"""
    verifier = getattr(request.app.state, "identity_verifier", None)
    if verifier is None:
        verifier = JWTIdentityVerifier.from_config(load_gateway_config())
        request.app.state.identity_verifier = verifier
    return verifier


def get_caller_id(
    request: Request,
    verifier: JWTIdentityVerifier = Depends(get_identity_verifier),
) -> str:
    """校验 Bearer token 并返回调用者 user_id"""
    return verifier.verify_authorization_header(request.headers.get("authorization"))
