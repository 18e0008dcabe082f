"""身份校验 -- Bearer JWT

受保护的操作从 Authorization 头读取 token，校验签名与过期时间，
取出 userId 声明作为调用者身份。任何失败都抛出 AuthenticationError。
"""

from datetime import UTC, datetime, timedelta

import jwt
from eventboard.core.exceptions import AuthenticationError

from .config import GatewayConfig

USER_ID_CLAIM = "userId"


class JWTIdentityVerifier:
    """JWT 身份校验器"""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    @classmethod
    def from_config(cls, config: GatewayConfig) -> "JWTIdentityVerifier":
        return cls(config.jwt_secret.get_secret_value(), config.jwt_algorithm)

    def verify_token(self, token: str) -> str:
        """校验 token 并返回调用者 user_id

        Raises:
            AuthenticationError: token 过期、签名无效、格式错误或缺少声明
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", USER_ID_CLAIM]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired") from None
        except jwt.InvalidSignatureError:
            raise AuthenticationError("Invalid token signature") from None
        except jwt.MissingRequiredClaimError as e:
            raise AuthenticationError(f"Token missing required claim: {e.claim}") from None
        except jwt.PyJWTError:
            raise AuthenticationError("Invalid token") from None

        user_id = payload[USER_ID_CLAIM]
        if not isinstance(user_id, str) or not user_id:
            raise AuthenticationError("Invalid user id in token")
        return user_id

    def verify_authorization_header(self, header: str | None) -> str:
        """解析 "Bearer <token>" 头并校验

        Raises:
            AuthenticationError: 头缺失或格式错误，或 token 无效
        """
        if not header:
            raise AuthenticationError("No token, authorization denied")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthenticationError("Authorization header must be 'Bearer <token>'")
        return self.verify_token(token.strip())


def create_access_token(
    user_id: str,
    config: GatewayConfig,
    expires_in: timedelta | None = None,
) -> str:
    """签发访问 token（供运维工具和测试使用）

    Args:
        user_id: 用户 ID
        config: Gateway 配置（密钥、算法、默认有效期）
        expires_in: 自定义有效期，默认使用 token_ttl_minutes

    Returns:
        编码后的 JWT 字符串
    """
    now = datetime.now(UTC)
    ttl = expires_in if expires_in is not None else timedelta(
        minutes=config.token_ttl_minutes
    )
    payload = {
        USER_ID_CLAIM: user_id,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(
        payload,
        config.jwt_secret.get_secret_value(),
        algorithm=config.jwt_algorithm,
    )
