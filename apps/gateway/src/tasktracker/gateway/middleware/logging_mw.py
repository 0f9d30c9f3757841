"""LoggingMiddleware -- 请求级日志与 request_id 关联

客户端携带合法的 X-Request-ID 时沿用，否则生成 ULID；
request_id 绑定到 structlog contextvars 并回写到响应头。
"""

import re
import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

# 只接受短的可打印标识，避免日志注入
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,64}$")


def resolve_request_id(incoming: str | None) -> str:
    """沿用上游 request_id，缺失或非法时生成新的 ULID"""
    if incoming and _REQUEST_ID_PATTERN.match(incoming):
        return incoming
    return str(ULID())


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        # 每个请求从干净的 context 开始，principal_id 等由后续依赖绑定
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        log = structlog.get_logger()
        await log.ainfo("request_started")
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            # 未被异常处理器接住的错误交给 ServerErrorMiddleware 渲染 500
            await log.aexception("request_failed", duration_ms=_elapsed_ms(started))
            raise

        emit = log.awarning if response.status_code >= 500 else log.ainfo
        await emit(
            "request_completed",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
