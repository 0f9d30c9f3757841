"""TraceMiddleware -- 为任务操作绑定 task_id

从 /api/tasks/{task_id}[/...] 路径中提取数字 task_id，
贯穿该请求内的所有日志。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


def extract_task_id(path: str) -> int | None:
    """从路径中提取 task_id，非任务路径返回 None"""
    parts = [part for part in path.split("/") if part]
    for i, part in enumerate(parts):
        if part == "tasks" and i + 1 < len(parts) and parts[i + 1].isdigit():
            return int(parts[i + 1])
    return None


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        task_id = extract_task_id(request.url.path)
        if task_id is not None:
            structlog.contextvars.bind_contextvars(task_id=task_id)

        return await call_next(request)
