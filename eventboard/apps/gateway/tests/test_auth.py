"""JWT 身份校验测试

测试内容：
1. 有效 token 返回 userId
2. 过期 / 签名错误 / 缺少声明 / 格式错误
3. Authorization 头解析
4. GatewayConfig 环境变量加载
"""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from eventboard.core.exceptions import AuthenticationError
from eventboard.gateway.auth import JWTIdentityVerifier, create_access_token
from eventboard.gateway.config import GatewayConfig, load_gateway_config

TEST_JWT_SECRET = "eventboard-test-secret-0123456789abcdef"


@pytest.fixture
def verifier() -> JWTIdentityVerifier:
    return JWTIdentityVerifier(TEST_JWT_SECRET)


class TestVerifyToken:
    """verify_token"""

    def test_valid_token(self, verifier, token_for):
        assert verifier.verify_token(token_for("user-1")) == "user-1"

    def test_expired_token(self, verifier, token_for):
        token = token_for("user-1", expires_in=timedelta(seconds=-5))
        with pytest.raises(AuthenticationError) as exc_info:
            verifier.verify_token(token)
        assert exc_info.value.message == "Token has expired"

    def test_wrong_secret(self, verifier):
        other = GatewayConfig(jwt_secret="another-secret-that-is-long-enough-123")
        token = create_access_token("user-1", other)
        with pytest.raises(AuthenticationError) as exc_info:
            verifier.verify_token(token)
        assert exc_info.value.message == "Invalid token signature"

    def test_missing_user_claim(self, verifier):
        token = jwt.encode(
            {"exp": datetime.now(UTC) + timedelta(minutes=5)},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError) as exc_info:
            verifier.verify_token(token)
        assert "userId" in exc_info.value.message

    def test_missing_exp(self, verifier):
        token = jwt.encode({"userId": "user-1"}, TEST_JWT_SECRET, algorithm="HS256")
        with pytest.raises(AuthenticationError):
            verifier.verify_token(token)

    def test_non_string_user_id(self, verifier):
        token = jwt.encode(
            {"userId": 42, "exp": datetime.now(UTC) + timedelta(minutes=5)},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            verifier.verify_token(token)

    def test_garbage(self, verifier):
        with pytest.raises(AuthenticationError) as exc_info:
            verifier.verify_token("not.a.token")
        assert exc_info.value.message == "Invalid token"


class TestAuthorizationHeader:
    """verify_authorization_header"""

    def test_bearer(self, verifier, token_for):
        header = f"Bearer {token_for('user-1')}"
        assert verifier.verify_authorization_header(header) == "user-1"

    def test_scheme_is_case_insensitive(self, verifier, token_for):
        header = f"bearer {token_for('user-1')}"
        assert verifier.verify_authorization_header(header) == "user-1"

    @pytest.mark.parametrize("header", [None, ""])
    def test_missing(self, verifier, header):
        with pytest.raises(AuthenticationError) as exc_info:
            verifier.verify_authorization_header(header)
        assert exc_info.value.message == "No token, authorization denied"

    @pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Bearer   "])
    def test_malformed(self, verifier, header):
        with pytest.raises(AuthenticationError):
            verifier.verify_authorization_header(header)


class TestGatewayConfig:
    """环境变量配置"""

    def test_defaults(self, monkeypatch):
        for key in (
            "EVENTBOARD_JWT_SECRET",
            "EVENTBOARD_JWT_ALGORITHM",
            "EVENTBOARD_TOKEN_TTL_MINUTES",
            "EVENTBOARD_MEDIA_BASE_URL",
            "EVENTBOARD_CORS_ORIGINS",
        ):
            monkeypatch.delenv(key, raising=False)

        config = load_gateway_config()

        assert config.jwt_algorithm == "HS256"
        assert config.token_ttl_minutes == 60
        assert config.media_base_url == "/media"
        assert config.cors_origins == ["*"]

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("EVENTBOARD_JWT_SECRET", TEST_JWT_SECRET)
        monkeypatch.setenv("EVENTBOARD_TOKEN_TTL_MINUTES", "5")
        monkeypatch.setenv("EVENTBOARD_CORS_ORIGINS", "http://a.test, http://b.test")

        config = load_gateway_config()

        assert config.jwt_secret.get_secret_value() == TEST_JWT_SECRET
        assert config.token_ttl_minutes == 5
        assert config.cors_origins == ["http://a.test", "http://b.test"]

    def test_invalid_ttl_falls_back(self, monkeypatch):
        monkeypatch.setenv("EVENTBOARD_TOKEN_TTL_MINUTES", "soon")
        assert load_gateway_config().token_ttl_minutes == 60

    def test_secret_not_in_repr(self):
        config = GatewayConfig(jwt_secret=TEST_JWT_SECRET)
        assert TEST_JWT_SECRET not in repr(config)
