"""枚举定义

包含 Role 角色、TaskStatus 任务状态、TaskPriority 优先级和 SortDirection 排序方向。
"""

from enum import StrEnum


class Role(StrEnum):
    """用户角色 -- 封闭集合，按值比较"""

    USER = "USER"
    ADMIN = "ADMIN"


class TaskStatus(StrEnum):
    """任务状态"""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class TaskPriority(StrEnum):
    """任务优先级"""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class SortDirection(StrEnum):
    """排序方向"""

    ASC = "ASC"
    DESC = "DESC"
