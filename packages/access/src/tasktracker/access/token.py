"""TokenCodec -- 无状态身份 token 的签发与校验

token 是 HS256 签名的 JWT，载荷为 sub（身份）、role（单一角色）、iat、exp。
服务端不保存会话，token 只会因过期而失效。

校验是 token、服务端密钥与当前时间的纯函数：过期判断由本模块按注入的时钟完成，
不依赖 PyJWT 内部的系统时钟。
"""

import hashlib
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt
import structlog
from pydantic import BaseModel, ConfigDict, SecretStr
from tasktracker.core.models import Role

from .config import DEFAULT_TOKEN_TTL_S
from .exceptions import ExpiredTokenError, InvalidTokenStateError, MalformedTokenError

log = structlog.get_logger()

Clock = Callable[[], datetime]

_REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenClaims(BaseModel):
    """校验通过后的 token 声明"""

    model_config = ConfigDict(frozen=True)

    subject: str
    role: Role


class AccessToken(BaseModel):
    """签发结果"""

    token: str
    subject: str
    role: Role
    issued_at: datetime
    expires_at: datetime


class TokenCodec:
    """签发与校验 token

    签名密钥由服务端 secret 经 SHA-256 派生，在实例上缓存，初始化后只读。
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        secret: str | SecretStr,
        ttl_s: int = DEFAULT_TOKEN_TTL_S,
        clock: Clock | None = None,
    ) -> None:
        """
        Args:
            secret: 服务端密钥
            ttl_s: token 有效期（秒）
            clock: 返回当前 UTC 时间的函数，测试时可注入
        """
        raw = secret.get_secret_value() if isinstance(secret, SecretStr) else secret
        if not raw:
            raise ValueError("token secret must not be empty")
        if ttl_s < 1:
            raise ValueError("token ttl must be positive")
        self._key = hashlib.sha256(raw.encode("utf-8")).digest()
        self._ttl = timedelta(seconds=ttl_s)
        self._clock = clock or _utcnow

    def issue(self, subject: str, role: Role | str | None) -> AccessToken:
        """为身份签发 token

        Args:
            subject: 身份标识（邮箱）
            role: 唯一角色

        Raises:
            InvalidTokenStateError: 身份没有有效角色
        """
        if not role:
            raise InvalidTokenStateError()
        try:
            role = Role(role)
        except ValueError:
            raise InvalidTokenStateError(f"Unknown role: {role}") from None

        # JWT 时间戳精度为秒
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._ttl

        token = jwt.encode(
            {
                "sub": subject,
                "role": role.value,
                "iat": int(issued_at.timestamp()),
                "exp": int(expires_at.timestamp()),
            },
            self._key,
            algorithm=self.ALGORITHM,
        )
        log.debug("token_issued", subject=subject, role=role.value)
        return AccessToken(
            token=token,
            subject=subject,
            role=role,
            issued_at=issued_at,
            expires_at=expires_at,
        )

    def verify(self, token: str) -> TokenClaims:
        """校验 token 并返回声明

        Raises:
            MalformedTokenError: 签名无效、结构损坏、缺少声明或角色未知
            ExpiredTokenError: 当前时间 >= exp
        """
        try:
            payload = jwt.decode(
                token,
                self._key,
                algorithms=[self.ALGORITHM],
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as e:
            log.info("token_rejected", reason="malformed", error=type(e).__name__)
            raise MalformedTokenError() from e

        exp = payload["exp"]
        if not isinstance(exp, int | float):
            log.info("token_rejected", reason="malformed", error="exp_not_numeric")
            raise MalformedTokenError()

        if self._clock().timestamp() >= exp:
            log.info("token_rejected", reason="expired", subject=payload["sub"])
            raise ExpiredTokenError()

        try:
            return TokenClaims(subject=payload["sub"], role=Role(payload["role"]))
        except ValueError as e:
            log.info("token_rejected", reason="malformed", error="unknown_role")
            raise MalformedTokenError() from e
