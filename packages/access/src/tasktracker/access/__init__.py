"""TaskTracker Access -- 认证、授权与更新合并核心

packages/access 的公开接口导出。
"""

# 授权
from .authorization import (
    Action,
    can_act,
    ensure_admin,
    ensure_can_act,
    ensure_can_query,
    is_assignee,
    is_author,
    is_owner,
    update_action_for,
)

# 配置
from .config import AccessConfig, load_access_config

# 异常
from .exceptions import (
    AuthenticationError,
    AuthenticationRequiredError,
    EmailAlreadyExistsError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenStateError,
    MalformedTokenError,
    UnknownPrincipalError,
)

# 合并
from .merge import OWNERSHIP_FIELDS, TaskChangeSet, merge_for, merge_full, merge_partial
from .passwords import hash_password, verify_password
from .principal import PrincipalResolver, authenticate
from .token import AccessToken, TokenClaims, TokenCodec

__all__ = [
    "TokenCodec",
    "TokenClaims",
    "AccessToken",
    "PrincipalResolver",
    "authenticate",
    "Action",
    "can_act",
    "ensure_can_act",
    "ensure_admin",
    "ensure_can_query",
    "is_author",
    "is_assignee",
    "is_owner",
    "update_action_for",
    "TaskChangeSet",
    "OWNERSHIP_FIELDS",
    "merge_partial",
    "merge_full",
    "merge_for",
    "hash_password",
    "verify_password",
    "AccessConfig",
    "load_access_config",
    "AuthenticationError",
    "AuthenticationRequiredError",
    "MalformedTokenError",
    "ExpiredTokenError",
    "UnknownPrincipalError",
    "InvalidCredentialsError",
    "InvalidTokenStateError",
    "EmailAlreadyExistsError",
]
