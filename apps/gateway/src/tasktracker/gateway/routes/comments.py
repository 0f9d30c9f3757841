"""评论路由

POST /api/tasks/{task_id}/comments: 添加评论（201）
GET  /api/tasks/{task_id}/comments: 分页查询评论，按创建时间正序
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from tasktracker.core.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, TEXT_MAX_LENGTH
from tasktracker.core.models import Comment, Page, PageRequest, Principal

from ..deps import get_current_principal, get_store_group
from ..services.comment_service import CommentService

router = APIRouter(prefix="/api/tasks/{task_id}/comments")


class CommentRequest(BaseModel):
    """添加评论请求体"""

    text: str = Field(min_length=1, max_length=TEXT_MAX_LENGTH)


@router.post("", response_model=Comment, status_code=201)
async def add_comment(
    task_id: int,
    body: CommentRequest,
    principal: Principal = Depends(get_current_principal),
    store_group=Depends(get_store_group),
):
    service = CommentService(store_group)
    return await service.add_comment(principal, task_id, body.text)


@router.get("", response_model=Page[Comment])
async def list_comments(
    task_id: int,
    page: int = Query(default=0, ge=0),
    size: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    principal: Principal = Depends(get_current_principal),
    store_group=Depends(get_store_group),
):
    service = CommentService(store_group)
    return await service.list_comments(principal, task_id, PageRequest(page=page, size=size))
