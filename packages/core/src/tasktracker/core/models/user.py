"""User / Principal 数据模型

User 是持久化的账户记录；Principal 是每个请求解析出的已认证调用方，
只存在于请求生命周期内，从不落盘。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import Role


class User(BaseModel):
    """账户记录"""

    id: int = Field(description="自增主键")
    email: str = Field(description="唯一身份标识")
    password_hash: str = Field(repr=False, description="bcrypt 口令摘要")
    role: Role = Field(default=Role.USER, description="角色")
    created_at: datetime = Field(description="注册时间")


class UserRef(BaseModel):
    """任务 / 评论对用户的引用"""

    id: int = Field(description="用户 ID")
    email: str | None = Field(default=None, description="用户邮箱（读取时填充）")


class Principal(BaseModel):
    """已认证的调用方 -- 请求内不可变"""

    model_config = ConfigDict(frozen=True)

    id: int
    identity: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(id=user.id, identity=user.email, role=user.role)

    def as_ref(self) -> UserRef:
        return UserRef(id=self.id, email=self.identity)
