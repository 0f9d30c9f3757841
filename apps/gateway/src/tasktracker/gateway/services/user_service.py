"""UserService -- 注册 / 登录 / 账户管理业务逻辑"""

import aiosqlite
import structlog
from tasktracker.access import (
    AccessConfig,
    AccessToken,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    TokenCodec,
    hash_password,
    verify_password,
)
from tasktracker.core.exceptions import UserNotFoundError
from tasktracker.core.models import Page, PageRequest, Role, User
from tasktracker.core.store import StoreGroup

log = structlog.get_logger()


class UserService:
    """账户业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        codec: TokenCodec | None = None,
        access_config: AccessConfig | None = None,
    ) -> None:
        self._stores = store_group
        self._codec = codec
        self._config = access_config

    async def email_exists(self, email: str) -> bool:
        return await self._stores.user_store.find_by_email(email) is not None

    async def register(self, email: str, password: str) -> AccessToken:
        """注册新用户（角色固定为 USER）并签发 token

        Raises:
            EmailAlreadyExistsError: 邮箱已注册
        """
        if await self.email_exists(email):
            log.warning("registration_failed", reason="email_exists", email=email)
            raise EmailAlreadyExistsError(email)

        password_hash = hash_password(password, self._config.bcrypt_rounds)
        try:
            user = await self._stores.user_store.create_user(email, password_hash, Role.USER)
        except aiosqlite.IntegrityError:
            # 并发注册同一邮箱：唯一约束兜底
            log.warning("registration_failed", reason="email_exists", email=email)
            raise EmailAlreadyExistsError(email) from None

        log.info("user_registered", user_id=user.id, email=email)
        return self._codec.issue(user.email, user.role)

    async def login(self, email: str, password: str) -> AccessToken:
        """校验口令并签发 token

        Raises:
            InvalidCredentialsError: 邮箱不存在或口令错误（不区分两者）
        """
        user = await self._stores.user_store.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            log.warning("login_failed", email=email)
            raise InvalidCredentialsError()

        log.info("user_logged_in", user_id=user.id)
        return self._codec.issue(user.email, user.role)

    async def list_users(self, page_request: PageRequest) -> Page[User]:
        return await self._stores.user_store.list_users(page_request)

    async def change_role(self, user_id: int, role: Role) -> User:
        """修改用户角色

        Raises:
            UserNotFoundError: 用户不存在
        """
        user = await self._stores.user_store.update_role(user_id, role)
        if user is None:
            raise UserNotFoundError(user_id)
        log.info("user_role_changed", user_id=user_id, role=role.value)
        return user
