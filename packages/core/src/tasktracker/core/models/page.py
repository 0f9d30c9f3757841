"""分页模型

PageRequest 描述一次分页查询（页码、页大小、多键排序），
Page 是 Store 返回的分页结果。
"""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, computed_field

from ..config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .enums import SortDirection

T = TypeVar("T")


class SortOrder(BaseModel):
    """单个排序键"""

    field: str
    direction: SortDirection = SortDirection.ASC


class PageRequest(BaseModel):
    """分页请求"""

    page: int = Field(default=0, ge=0, description="页码，从 0 开始")
    size: int = Field(
        default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="页大小"
    )
    sort: list[SortOrder] = Field(default_factory=list, description="排序键，左侧优先")

    @property
    def offset(self) -> int:
        return self.page * self.size


class Page(BaseModel, Generic[T]):
    """分页结果"""

    content: list[T]
    page: int
    size: int
    total_elements: int

    @computed_field
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0
