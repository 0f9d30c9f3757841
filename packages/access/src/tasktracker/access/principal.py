"""PrincipalResolver -- 将已校验的 token 身份映射为 Principal

每个已认证请求都必须解析一次，结果不跨请求缓存。
即使 token 密码学上有效，身份不存在（账号被删除）时也必须拒绝。
"""

import structlog
from tasktracker.core.models import Principal
from tasktracker.core.store.protocols import UserStore

from .exceptions import UnknownPrincipalError
from .token import TokenCodec

log = structlog.get_logger()


class PrincipalResolver:
    """基于 UserStore 的 Principal 解析器"""

    def __init__(self, user_store: UserStore) -> None:
        self._users = user_store

    async def resolve(self, subject: str) -> Principal:
        """根据身份标识解析 Principal

        角色取自存储中的用户记录，而不是 token 里的 role 声明。

        Raises:
            UnknownPrincipalError: 身份已不存在
        """
        user = await self._users.find_by_email(subject)
        if user is None:
            log.info("principal_unknown", identity=subject)
            raise UnknownPrincipalError(subject)
        return Principal.from_user(user)


async def authenticate(
    token: str,
    codec: TokenCodec,
    resolver: PrincipalResolver,
) -> Principal:
    """认证阶段：校验 token + 解析 Principal

    Raises:
        MalformedTokenError / ExpiredTokenError: token 问题
        UnknownPrincipalError: 身份已不存在
    """
    claims = codec.verify(token)
    principal = await resolver.resolve(claims.subject)
    structlog.contextvars.bind_contextvars(principal_id=principal.id)
    return principal
