"""更新合并引擎 -- 按调用方权限层级将稀疏变更集合并到任务

两种策略：
- 部分合并（非 ADMIN）：只允许 title / description / status / priority 变化。
  变更集中的 author / assignee 即使存在也被忽略（白名单，而不是黑名单），
  解析时直接丢弃，格式错误也不会导致整个请求被拒绝。
- 全量合并（ADMIN）：变更集中提供的每个字段都覆盖任务对应字段，
  包括 author / assignee。

两种策略共同规则：
- id 永不覆盖
- 缺省的字段保持不变
- 显式 null：description 被清空；title / status / priority 不可为空，
  author / assignee 为引用字段，null 都视为"不变"
- 逐字段显式列举，不做反射式字段拷贝
- 不做 I/O，返回新的 Task，重复应用同一变更集结果不变
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from tasktracker.core.config import TEXT_MAX_LENGTH, TITLE_MAX_LENGTH
from tasktracker.core.exceptions import InvalidChangeSetError
from tasktracker.core.models import Principal, Task, TaskPriority, TaskStatus, UserRef

from .authorization import Action, update_action_for

# 只有全量合并才会读取的归属字段
OWNERSHIP_FIELDS: frozenset[str] = frozenset({"author", "assignee"})


class TaskChangeSet(BaseModel):
    """任务稀疏变更集 -- 所有字段可选，缺省表示不变"""

    model_config = ConfigDict(extra="forbid")

    id: int | None = Field(default=None, description="忽略，id 不可修改")
    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=TEXT_MAX_LENGTH)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    author: UserRef | None = None
    assignee: UserRef | None = None

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        ignore: frozenset[str] = frozenset(),
    ) -> "TaskChangeSet":
        """从原始请求数据构造变更集

        Args:
            payload: 请求体
            ignore: 解析前丢弃的字段（不校验、不报错）

        Raises:
            InvalidChangeSetError: 未知字段、非法枚举值或长度越界
        """
        data = {key: value for key, value in payload.items() if key not in ignore}
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidChangeSetError(_describe(e)) from e

    @classmethod
    def for_principal(cls, principal: Principal, payload: Mapping[str, Any]) -> "TaskChangeSet":
        """按 principal 的权限层级解析变更集，部分合并层级丢弃归属字段"""
        if update_action_for(principal) == Action.UPDATE_FULL:
            return cls.from_payload(payload)
        return cls.from_payload(payload, ignore=OWNERSHIP_FIELDS)

    def referenced_user_ids(self) -> set[int]:
        """变更集中引用的用户 id（供调用方校验存在性）"""
        return {ref.id for ref in (self.author, self.assignee) if ref is not None}


def _describe(error: ValidationError) -> str:
    details = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "body"
        details.append(f"{location}: {err['msg']}")
    return "Invalid change-set: " + "; ".join(details)


def _content_updates(changes: TaskChangeSet) -> dict[str, Any]:
    updates: dict[str, Any] = {}
    if changes.title is not None:
        updates["title"] = changes.title
    # description 可为空：显式提供的 null 表示清空
    if "description" in changes.model_fields_set:
        updates["description"] = changes.description
    if changes.status is not None:
        updates["status"] = changes.status
    if changes.priority is not None:
        updates["priority"] = changes.priority
    return updates


def merge_partial(task: Task, changes: TaskChangeSet) -> Task:
    """部分合并：只允许内容字段变化"""
    return task.model_copy(update=_content_updates(changes))


def merge_full(task: Task, changes: TaskChangeSet) -> Task:
    """全量合并：提供的字段全部覆盖，包括 author / assignee"""
    updates = _content_updates(changes)
    if changes.author is not None:
        updates["author"] = changes.author
    if changes.assignee is not None:
        updates["assignee"] = changes.assignee
    return task.model_copy(update=updates)


def merge_for(principal: Principal, task: Task, changes: TaskChangeSet) -> Task:
    """按 principal 的权限层级选择合并策略"""
    if update_action_for(principal) == Action.UPDATE_FULL:
        return merge_full(task, changes)
    return merge_partial(task, changes)
