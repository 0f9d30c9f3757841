"""任务查询组合器 -- author / assignee 过滤谓词 + 多键排序解析

compose_filter() 根据可选的 author_id / assignee_id 构造过滤谓词：
- 两者都有：author == a OR assignee == b（并集，不是交集）
- 只有一个：该字段上的等值过滤
- 都没有：不限制（调用方自己的可见性规则在上游执行）

parse_sort() 解析 "field,direction" 形式的排序参数，支持单对或多对，
保持从左到右的优先级。
"""

from collections.abc import Iterable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from .exceptions import InvalidSortError
from .models import SortDirection, SortOrder, Task

# 可排序字段 -> tasks 表列名（查询中 tasks 的别名为 t）
TASK_SORT_FIELDS: dict[str, str] = {
    "id": "t.id",
    "title": "t.title",
    "description": "t.description",
    "status": "t.status",
    "priority": "t.priority",
    "author": "t.author_id",
    "assignee": "t.assignee_id",
}

DEFAULT_TASK_SORT: tuple[SortOrder, ...] = (
    SortOrder(field="id", direction=SortDirection.DESC),
)


class FilterKind(StrEnum):
    """过滤谓词类型"""

    UNRESTRICTED = "UNRESTRICTED"
    AUTHOR = "AUTHOR"
    ASSIGNEE = "ASSIGNEE"
    AUTHOR_OR_ASSIGNEE = "AUTHOR_OR_ASSIGNEE"


class TaskFilter(BaseModel):
    """任务过滤谓词 -- 可在内存中求值，也可渲染为 SQL 片段"""

    model_config = ConfigDict(frozen=True)

    kind: FilterKind
    author_id: int | None = None
    assignee_id: int | None = None

    def matches(self, task: Task) -> bool:
        """在内存中对单个任务求值"""
        author_hit = task.author.id == self.author_id
        assignee_hit = task.assignee is not None and task.assignee.id == self.assignee_id

        if self.kind == FilterKind.AUTHOR_OR_ASSIGNEE:
            return author_hit or assignee_hit
        if self.kind == FilterKind.AUTHOR:
            return author_hit
        if self.kind == FilterKind.ASSIGNEE:
            return assignee_hit
        return True

    def to_sql(self) -> tuple[str, tuple[int, ...]]:
        """渲染为参数化 WHERE 片段

        Returns:
            (where_clause, params)，不限制时 where_clause 为空字符串
        """
        if self.kind == FilterKind.AUTHOR_OR_ASSIGNEE:
            return "(t.author_id = ? OR t.assignee_id = ?)", (self.author_id, self.assignee_id)
        if self.kind == FilterKind.AUTHOR:
            return "t.author_id = ?", (self.author_id,)
        if self.kind == FilterKind.ASSIGNEE:
            return "t.assignee_id = ?", (self.assignee_id,)
        return "", ()


def compose_filter(author_id: int | None = None, assignee_id: int | None = None) -> TaskFilter:
    """根据可选参数构造过滤谓词

    Args:
        author_id: 创建者 ID
        assignee_id: 执行者 ID

    Returns:
        TaskFilter 实例
    """
    if author_id is not None and assignee_id is not None:
        return TaskFilter(
            kind=FilterKind.AUTHOR_OR_ASSIGNEE,
            author_id=author_id,
            assignee_id=assignee_id,
        )
    if author_id is not None:
        return TaskFilter(kind=FilterKind.AUTHOR, author_id=author_id)
    if assignee_id is not None:
        return TaskFilter(kind=FilterKind.ASSIGNEE, assignee_id=assignee_id)
    return TaskFilter(kind=FilterKind.UNRESTRICTED)


def _parse_direction(raw: str) -> SortDirection:
    try:
        return SortDirection(raw.strip().upper())
    except ValueError:
        raise InvalidSortError(
            f"Invalid sort direction '{raw}', expected 'asc' or 'desc'"
        ) from None


def parse_sort(
    values: str | Iterable[str] | None,
    allowed_fields: Iterable[str] = TASK_SORT_FIELDS,
    default: Iterable[SortOrder] = DEFAULT_TASK_SORT,
) -> list[SortOrder]:
    """解析排序参数

    接受以下形式（方向大小写不敏感）：
    - "title,asc"
    - ["title", "asc"]（单对被拆成两个值）
    - ["id,desc", "title,asc"]
    - "id,desc,title,asc"

    Args:
        values: 原始排序参数
        allowed_fields: 允许排序的字段名
        default: 未提供排序参数时的默认排序

    Returns:
        SortOrder 列表，左侧优先

    Raises:
        InvalidSortError: 方向非法、字段未知或 field/direction 不成对
    """
    if values is None:
        values = []
    elif isinstance(values, str):
        values = [values]

    tokens = [token.strip() for value in values for token in value.split(",")]
    tokens = [token for token in tokens if token]
    if not tokens:
        return list(default)

    if len(tokens) % 2 != 0:
        raise InvalidSortError(
            "Sort must be given as 'field,direction' pairs, got: " + ",".join(tokens)
        )

    allowed = set(allowed_fields)
    orders: list[SortOrder] = []
    for field, raw_direction in zip(tokens[0::2], tokens[1::2], strict=True):
        if field not in allowed:
            raise InvalidSortError(f"Unknown sort field '{field}'")
        orders.append(SortOrder(field=field, direction=_parse_direction(raw_direction)))
    return orders
