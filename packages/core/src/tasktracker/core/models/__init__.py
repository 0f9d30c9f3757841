"""TaskTracker Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .comment import Comment
from .enums import Role, SortDirection, TaskPriority, TaskStatus
from .page import Page, PageRequest, SortOrder
from .task import Task
from .user import Principal, User, UserRef

__all__ = [
    # 枚举
    "Role",
    "TaskStatus",
    "TaskPriority",
    "SortDirection",
    # 账户
    "User",
    "UserRef",
    "Principal",
    # Task
    "Task",
    # Comment
    "Comment",
    # 分页
    "Page",
    "PageRequest",
    "SortOrder",
]
