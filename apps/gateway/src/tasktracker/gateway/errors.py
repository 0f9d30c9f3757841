"""全局异常处理 -- 把业务异常渲染为统一错误响应

响应体固定为 {timestamp, status, message}；
TASKTRACKER_APP_ENV=development 时额外附带 stack_trace。
"""

import traceback
from datetime import UTC, datetime

import structlog
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse
from tasktracker.core.config import is_development
from tasktracker.core.exceptions import TaskTrackerError

log = structlog.get_logger()


def error_body(status: int, message: str, exc: BaseException) -> dict:
    """构建错误响应体"""
    body = {
        "timestamp": datetime.now(UTC).isoformat(),
        "status": status,
        "message": message,
    }
    if is_development():
        body["stack_trace"] = traceback.format_exception(exc)
    return body


async def handle_tasktracker_error(request: Request, exc: TaskTrackerError) -> JSONResponse:
    """业务拒绝：认证 / 授权 / 不存在 / 输入非法"""
    await log.ainfo(
        "request_rejected",
        error=type(exc).__name__,
        status_code=exc.status_code,
        message=exc.message,
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.message, exc),
        headers=headers,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """未预期异常统一返回 500，细节只在开发模式暴露"""
    await log.aexception("unhandled_error", error=type(exc).__name__)
    message = "An unexpected error occurred"
    if is_development():
        message = f"{message}: {exc}"
    return JSONResponse(status_code=500, content=error_body(500, message, exc))


def register_exception_handlers(app: FastAPI) -> None:
    """注册异常处理器"""
    app.add_exception_handler(TaskTrackerError, handle_tasktracker_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
