"""AccessConfig -- 认证配置加载

从环境变量加载签名密钥、token 有效期与 bcrypt 轮数。
"""

import os

import structlog
from pydantic import BaseModel, Field, SecretStr
from tasktracker.core.config import is_development

log = structlog.get_logger()

DEFAULT_TOKEN_TTL_S = 3600
DEFAULT_BCRYPT_ROUNDS = 12

# 仅开发模式可用的默认密钥
_DEVELOPMENT_SECRET = "tasktracker-development-secret"


class AccessConfig(BaseModel):
    """认证配置

    环境变量:
        TASKTRACKER_JWT_SECRET: token 签名密钥（非开发模式必填）
        TASKTRACKER_TOKEN_TTL_S: token 有效期（秒，默认 3600）
        TASKTRACKER_BCRYPT_ROUNDS: bcrypt 成本因子（4-31，默认 12）
    """

    jwt_secret: SecretStr = Field(description="token 签名密钥")
    token_ttl_s: int = Field(
        default=DEFAULT_TOKEN_TTL_S,
        ge=1,
        description="token 有效期（秒）",
    )
    bcrypt_rounds: int = Field(
        default=DEFAULT_BCRYPT_ROUNDS,
        ge=4,
        le=31,
        description="bcrypt 成本因子（log2 轮数）",
    )


def _int_from_env(env_var: str, fallback: int) -> int | None:
    val = os.environ.get(env_var)
    if not val:
        return None
    try:
        return int(val)
    except ValueError:
        log.warning("invalid_int_config", env_var=env_var, value=val, fallback=fallback)
        return None


def load_access_config() -> AccessConfig:
    """从环境变量加载认证配置

    Raises:
        RuntimeError: 非开发模式下未配置 TASKTRACKER_JWT_SECRET
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKTRACKER_JWT_SECRET"):
        kwargs["jwt_secret"] = SecretStr(val)
    elif is_development():
        log.warning("jwt_secret_not_configured", fallback="development default")
        kwargs["jwt_secret"] = SecretStr(_DEVELOPMENT_SECRET)
    else:
        raise RuntimeError("TASKTRACKER_JWT_SECRET must be set outside development mode")

    ttl = _int_from_env("TASKTRACKER_TOKEN_TTL_S", DEFAULT_TOKEN_TTL_S)
    if ttl is not None:
        kwargs["token_ttl_s"] = ttl

    rounds = _int_from_env("TASKTRACKER_BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)
    if rounds is not None:
        kwargs["bcrypt_rounds"] = rounds

    return AccessConfig(**kwargs)
