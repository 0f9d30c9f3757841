"""任务路由

POST   /api/tasks: 创建任务
GET    /api/tasks/all: 不分页列出可见任务
GET    /api/tasks: 按 authorId / assigneeId 分页查询，支持多键排序
GET    /api/tasks/{task_id}: 任务详情
PUT    /api/tasks/{task_id}: 按调用方权限层级合并更新
DELETE /api/tasks/{task_id}: 删除任务
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from pydantic import BaseModel, Field
from starlette.responses import Response
from tasktracker.core.config import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    TEXT_MAX_LENGTH,
    TITLE_MAX_LENGTH,
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
from tasktracker.core.query import parse_sort

from ..deps import get_current_principal, get_store_group
from ..services.task_service import TaskService

router = APIRouter(prefix="/api/tasks")


class CreateTaskRequest(BaseModel):
    """创建任务请求体"""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=TEXT_MAX_LENGTH)
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    author: UserRef | None = None
    assignee: UserRef | None = None


@router.post("", response_model=Task, status_code=201)
async def create_task(
    body: CreateTaskRequest,
    principal: Principal = Depends(get_current_principal),
    store_group=Depends(get_store_group),
):
    """创建任务，author 缺省为调用方"""
    service = TaskService(store_group)
    return await service.create_task(
        principal,
        title=body.title,
        description=body.description,
        status=body.status,
        priority=body.priority,
        author=body.author,
        assignee=body.assignee,
    )


@router.get("/all", response_model=list[Task])
async def list_all_tasks(
    principal: Principal = Depends(get_current_principal),
    store_group=Depends(get_store_group),
):
    """ADMIN 返回全部任务，其他用户返回自己是 owner 的任务"""
    service = TaskService(store_group)
    page = await service.list_all(principal)
    return page.content


@router.get("", response_model=Page[Task])
async def query_tasks(
    author_id: int | None = Query(default=None, alias="authorId"),
    assignee_id: int | None = Query(default=None, alias="assigneeId"),
    page: int = Query(default=0, ge=0),
    size: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort: list[str] = Query(default=["id,desc"], description="field,direction 对，可重复"),
    principal: Principal = Depends(get_current_principal),
    store_group=Depends(get_store_group),
):
    """按 author / assignee 分页查询

    两者都提供时返回并集（author 或 assignee 匹配）。
    """
    page_request = PageRequest(page=page, size=size, sort=parse_sort(sort))
    service = TaskService(store_group)
    return await service.query_tasks(principal, author_id, assignee_id, page_request)


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: int,
    principal: Principal = Depends(get_current_principal),
    store_group=Depends(get_store_group),
):
    """任务详情"""
    service = TaskService(store_group)
    return await service.get_task(principal, task_id)


@router.put("/{task_id}", response_model=Task)
async def update_task(
    task_id: int,
    body: dict[str, Any] = Body(...),
    principal: Principal = Depends(get_current_principal),
    store_group=Depends(get_store_group),
):
    """更新任务

    ADMIN 可修改全部字段；owner 只能修改 title / description / status / priority，
    请求中的其他字段被忽略。
    """
    service = TaskService(store_group)
    return await service.update_task(principal, task_id, body)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: int,
    principal: Principal = Depends(get_current_principal),
    store_group=Depends(get_store_group),
):
    service = TaskService(store_group)
    await service.delete_task(principal, task_id)
    return Response(status_code=204)
