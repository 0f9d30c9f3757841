"""管理路由 -- 整个前缀在路由层要求 ADMIN 角色

GET /api/admin/users: 分页列出用户
PUT /api/admin/users/{user_id}/role: 修改用户角色
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from tasktracker.core.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from tasktracker.core.models import Page, PageRequest, Role, User

from ..deps import get_store_group, require_admin
from ..services.user_service import UserService

router = APIRouter(prefix="/api/admin", dependencies=[Depends(require_admin)])


class UserResponse(BaseModel):
    """用户视图（不含口令摘要）"""

    id: int
    email: str
    role: Role
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, email=user.email, role=user.role, created_at=user.created_at)


class RoleChangeRequest(BaseModel):
    role: Role


@router.get("/users", response_model=Page[UserResponse])
async def list_users(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    store_group=Depends(get_store_group),
):
    service = UserService(store_group)
    users = await service.list_users(PageRequest(page=page, size=size))
    return Page[UserResponse](
        content=[UserResponse.from_user(u) for u in users.content],
        page=users.page,
        size=users.size,
        total_elements=users.total_elements,
    )


@router.put("/users/{user_id}/role", response_model=UserResponse)
async def change_role(
    user_id: int,
    body: RoleChangeRequest,
    store_group=Depends(get_store_group),
):
    """修改用户角色，立即对该用户后续请求生效（角色按请求从存储解析）"""
    service = UserService(store_group)
    user = await service.change_role(user_id, body.role)
    return UserResponse.from_user(user)
