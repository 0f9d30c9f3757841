"""Comment Domain Model

评论只能通过"添加评论"创建，创建后不可修改，始终绑定到一个任务。
"""

from datetime import datetime

from pydantic import BaseModel, Field

from ..config import TEXT_MAX_LENGTH
from .user import UserRef


class Comment(BaseModel):
    """Comment 数据模型"""

    id: int | None = Field(default=None, description="自增主键，未落盘时为 None")
    text: str = Field(max_length=TEXT_MAX_LENGTH, description="评论正文")
    author: UserRef = Field(description="评论者")
    task_id: int = Field(description="所属任务 ID")
    created_date: datetime = Field(description="创建时间")
