"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store、TokenCodec 与当前 Principal

共享对象通过 app.state 管理，在 lifespan 中初始化/清理。
Principal 在每个受保护请求上解析一次，并作为参数显式传递给 service，
不存在全局的安全上下文。
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from tasktracker.access import (
    AccessConfig,
    AuthenticationRequiredError,
    PrincipalResolver,
    TokenCodec,
    authenticate,
    ensure_admin,
)
from tasktracker.core.models import Principal
from tasktracker.core.store import StoreGroup

bearer_scheme = HTTPBearer(auto_error=False)


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_token_codec(request: Request) -> TokenCodec:
    """从 app.state 获取 TokenCodec 实例"""
    return request.app.state.token_codec


def get_access_config(request: Request) -> AccessConfig:
    """从 app.state 获取 AccessConfig 实例"""
    return request.app.state.access_config


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    store_group: StoreGroup = Depends(get_store_group),
    codec: TokenCodec = Depends(get_token_codec),
) -> Principal:
    """认证阶段：Authorization: Bearer <token> -> Principal"""
    if credentials is None:
        raise AuthenticationRequiredError()
    resolver = PrincipalResolver(store_group.user_store)
    return await authenticate(credentials.credentials, codec, resolver)


async def require_admin(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """/api/admin 路由前缀的角色检查"""
    ensure_admin(principal)
    return principal
