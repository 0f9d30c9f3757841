"""TaskService -- 任务创建 / 查询 / 更新 / 删除业务逻辑

每个操作都先查出资源（不存在 -> 404），再调用授权引擎（拒绝 -> 403），
最后才触达持久化。更新通过合并引擎按调用方权限层级计算新状态。
"""

from collections.abc import Mapping
from typing import Any

import structlog
from tasktracker.access import (
    Action,
    TaskChangeSet,
    ensure_can_act,
    ensure_can_query,
    merge_for,
    update_action_for,
)
from tasktracker.core.exceptions import (
    InvalidChangeSetError,
    PermissionDeniedError,
    TaskNotFoundError,
)
from tasktracker.core.models import (
    Page,
    PageRequest,
    Principal,
    Task,
    TaskPriority,
    TaskStatus,
    UserRef,
)
from tasktracker.core.query import compose_filter
from tasktracker.core.store import StoreGroup

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def _load(self, task_id: int) -> Task:
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def _resolve_refs(self, *refs: UserRef | None) -> list[UserRef | None]:
        """校验被引用的用户存在，并补全邮箱"""
        resolved: list[UserRef | None] = []
        for ref in refs:
            if ref is None:
                resolved.append(None)
                continue
            user = await self._stores.user_store.get_user(ref.id)
            if user is None:
                raise InvalidChangeSetError(f"Unknown user id: {ref.id}")
            resolved.append(UserRef(id=user.id, email=user.email))
        return resolved

    async def create_task(
        self,
        principal: Principal,
        title: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.PENDING,
        priority: TaskPriority = TaskPriority.MEDIUM,
        author: UserRef | None = None,
        assignee: UserRef | None = None,
    ) -> Task:
        """创建任务

        author 缺省为调用方本人；只有 ADMIN 可以代他人创建。
        """
        if author is None:
            author = principal.as_ref()
        elif author.id != principal.id and not principal.is_admin:
            log.info("permission_denied", principal_id=principal.id, action="CREATE_FOR_OTHER")
            raise PermissionDeniedError("Only admins can create tasks for another author")

        author, assignee = await self._resolve_refs(author, assignee)
        task = await self._stores.task_store.save_task(
            Task(
                title=title,
                description=description,
                status=status,
                priority=priority,
                author=author,
                assignee=assignee,
            )
        )
        log.info(
            "task_created",
            task_id=task.id,
            author_id=task.author.id,
            assignee_id=task.assignee.id if task.assignee else None,
        )
        return task

    async def get_task(self, principal: Principal, task_id: int) -> Task:
        """查询单个任务（READ）"""
        task = await self._load(task_id)
        ensure_can_act(principal, task, Action.READ)
        return task

    async def list_all(self, principal: Principal) -> Page[Task]:
        """不分页列出可见任务：ADMIN 全部，其他人只看自己是 owner 的"""
        if principal.is_admin:
            task_filter = compose_filter()
        else:
            task_filter = compose_filter(author_id=principal.id, assignee_id=principal.id)
        return await self._stores.task_store.find_tasks(task_filter)

    async def query_tasks(
        self,
        principal: Principal,
        author_id: int | None,
        assignee_id: int | None,
        page_request: PageRequest,
    ) -> Page[Task]:
        """按 author / assignee 分页查询

        非 ADMIN 只能查询自己的 id；两个参数都缺省时默认查询自己是 owner 的任务。
        """
        ensure_can_query(principal, author_id, assignee_id)
        if not principal.is_admin and author_id is None and assignee_id is None:
            author_id = assignee_id = principal.id

        task_filter = compose_filter(author_id=author_id, assignee_id=assignee_id)
        return await self._stores.task_store.find_tasks(task_filter, page_request)

    async def update_task(
        self,
        principal: Principal,
        task_id: int,
        payload: Mapping[str, Any],
    ) -> Task:
        """按调用方权限层级合并更新任务

        Raises:
            TaskNotFoundError: 任务不存在
            PermissionDeniedError: 调用方不是 ADMIN 也不是 owner
            InvalidChangeSetError: 变更集非法或引用了不存在的用户
        """
        task = await self._load(task_id)
        action = update_action_for(principal)
        ensure_can_act(principal, task, action)

        changes = TaskChangeSet.for_principal(principal, payload)
        provided = sorted(changes.model_fields_set)
        if action == Action.UPDATE_FULL:
            author, assignee = await self._resolve_refs(changes.author, changes.assignee)
            changes = changes.model_copy(update={"author": author, "assignee": assignee})

        merged = merge_for(principal, task, changes)
        saved = await self._stores.task_store.save_task(merged)
        log.info(
            "task_updated",
            task_id=task_id,
            action=action.value,
            fields=provided,
        )
        return saved

    async def delete_task(self, principal: Principal, task_id: int) -> None:
        """删除任务（仅 ADMIN 或 author）"""
        task = await self._load(task_id)
        ensure_can_act(principal, task, Action.DELETE)

        if not await self._stores.task_store.delete_task(task_id):
            # 授权之后、删除之前被并发删除
            raise TaskNotFoundError(task_id)
        log.info("task_deleted", task_id=task_id)
