"""Store Protocol 接口定义

定义 UserStore、TaskStore、CommentStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
访问控制核心只依赖这些接口，不关心具体持久化实现。
"""

from typing import Protocol

from ..models import Comment, Page, PageRequest, Role, Task, User
from ..query import TaskFilter


class UserStore(Protocol):
    """User 存储接口"""

    async def create_user(self, email: str, password_hash: str, role: Role) -> User:
        """创建用户记录，返回带 id 的 User"""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """根据邮箱查询用户"""
        ...

    async def get_user(self, user_id: int) -> User | None:
        """根据 id 查询用户"""
        ...

    async def list_users(self, page_request: PageRequest) -> Page[User]:
        """分页查询用户"""
        ...

    async def update_role(self, user_id: int, role: Role) -> User | None:
        """修改用户角色，用户不存在时返回 None"""
        ...


class TaskStore(Protocol):
    """Task 存储接口"""

    async def get_task(self, task_id: int) -> Task | None:
        """根据 id 查询任务"""
        ...

    async def save_task(self, task: Task) -> Task:
        """保存任务（id 为 None 时插入，否则整行更新）"""
        ...

    async def delete_task(self, task_id: int) -> bool:
        """删除任务，返回是否确实删除"""
        ...

    async def find_tasks(
        self,
        task_filter: TaskFilter,
        page_request: PageRequest | None = None,
    ) -> Page[Task]:
        """按过滤谓词分页查询任务，page_request 为 None 时不分页"""
        ...


class CommentStore(Protocol):
    """Comment 存储接口 -- 评论只追加，不修改"""

    async def save_comment(self, comment: Comment) -> Comment:
        """追加评论"""
        ...

    async def list_for_task(self, task_id: int, page_request: PageRequest) -> Page[Comment]:
        """分页查询指定任务的评论，按创建时间正序"""
        ...
