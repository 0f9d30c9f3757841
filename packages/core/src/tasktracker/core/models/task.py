"""Task Domain Model

author 在创建时确定，是主要的归属锚点；assignee 是次要锚点，可为空。
"""

from pydantic import BaseModel, Field

from ..config import TEXT_MAX_LENGTH, TITLE_MAX_LENGTH
from .enums import TaskPriority, TaskStatus
from .user import UserRef


class Task(BaseModel):
    """Task 数据模型"""

    id: int | None = Field(default=None, description="自增主键，未落盘时为 None")
    title: str = Field(
        min_length=1, max_length=TITLE_MAX_LENGTH, description="任务标题"
    )
    description: str | None = Field(
        default=None, max_length=TEXT_MAX_LENGTH, description="任务描述"
    )
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="当前状态")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="优先级")
    author: UserRef = Field(description="创建者")
    assignee: UserRef | None = Field(default=None, description="执行者")
