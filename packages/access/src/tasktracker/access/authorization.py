"""授权引擎 -- 基于角色与归属关系的纯判定函数

判定优先级：
1. ADMIN 无条件允许（包括可改派 author / assignee 的 UPDATE_FULL）
2. READ / UPDATE_PARTIAL / COMMENT：principal 是任务的 author 或 assignee
3. DELETE：principal 是任务的 author（仅 assignee 不够）
4. UPDATE_FULL 只对 ADMIN 开放
其余一律拒绝。拒绝通过 PermissionDeniedError 显式暴露给调用方。
"""

from enum import StrEnum

import structlog
from tasktracker.core.exceptions import PermissionDeniedError
from tasktracker.core.models import Principal, Task

log = structlog.get_logger()


class Action(StrEnum):
    """业务动作"""

    READ = "READ"
    UPDATE_FULL = "UPDATE_FULL"
    UPDATE_PARTIAL = "UPDATE_PARTIAL"
    DELETE = "DELETE"
    COMMENT = "COMMENT"


# 任务 owner（author 或 assignee）可执行的动作
OWNER_ACTIONS: frozenset[Action] = frozenset(
    {Action.READ, Action.UPDATE_PARTIAL, Action.COMMENT}
)

# 仅 author 可执行的动作
AUTHOR_ACTIONS: frozenset[Action] = frozenset({Action.DELETE})


def is_author(principal: Principal, task: Task) -> bool:
    return task.author is not None and task.author.id == principal.id


def is_assignee(principal: Principal, task: Task) -> bool:
    # assignee 为空时按"不是 assignee"处理
    return task.assignee is not None and task.assignee.id == principal.id


def is_owner(principal: Principal, task: Task) -> bool:
    return is_author(principal, task) or is_assignee(principal, task)


def can_act(principal: Principal, task: Task, action: Action) -> bool:
    """判定 principal 能否对任务执行动作

    Args:
        principal: 已认证调用方
        task: 目标任务（提供 author / assignee 归属信息）
        action: 动作类型

    Returns:
        True 允许，False 拒绝
    """
    if principal.is_admin:
        return True
    if action in OWNER_ACTIONS:
        return is_owner(principal, task)
    if action in AUTHOR_ACTIONS:
        return is_author(principal, task)
    return False


def ensure_can_act(principal: Principal, task: Task, action: Action) -> None:
    """判定失败时抛出 PermissionDeniedError"""
    if not can_act(principal, task, action):
        log.info(
            "permission_denied",
            principal_id=principal.id,
            task_id=task.id,
            action=action.value,
        )
        raise PermissionDeniedError()


def update_action_for(principal: Principal) -> Action:
    """ADMIN 走全量更新，其余调用方一律走部分更新"""
    return Action.UPDATE_FULL if principal.is_admin else Action.UPDATE_PARTIAL


def ensure_admin(principal: Principal) -> None:
    """管理类路由的角色检查"""
    if not principal.is_admin:
        log.info("permission_denied", principal_id=principal.id, action="ADMIN")
        raise PermissionDeniedError("Admin role required")


def ensure_can_query(
    principal: Principal,
    author_id: int | None,
    assignee_id: int | None,
) -> None:
    """列表查询的可见性规则：非 ADMIN 只能在两个参数中填自己的 id"""
    if principal.is_admin:
        return
    for requested in (author_id, assignee_id):
        if requested is not None and requested != principal.id:
            log.info(
                "permission_denied",
                principal_id=principal.id,
                action="QUERY",
                requested_id=requested,
            )
            raise PermissionDeniedError("You can only query your own tasks")
