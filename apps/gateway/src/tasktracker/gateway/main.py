"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + TokenCodec 初始化 + 路由注册。
"""

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from tasktracker.access import TokenCodec, load_access_config
from tasktracker.core.config import get_db_path
from tasktracker.core.store import create_store_group

from .errors import register_exception_handlers
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import admin, auth, comments, health, tasks

log = structlog.get_logger()

DEFAULT_CORS_ORIGINS = "http://localhost:8081"


def get_cors_origins() -> list[str]:
    """TASKTRACKER_CORS_ORIGINS，逗号分隔"""
    raw = os.environ.get("TASKTRACKER_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 Store 与 TokenCodec，关闭时清理连接"""
    db_path = get_db_path()
    app.state.store_group = await create_store_group(db_path)

    access_config = load_access_config()
    app.state.access_config = access_config
    app.state.token_codec = TokenCodec(
        access_config.jwt_secret,
        ttl_s=access_config.token_ttl_s,
    )
    log.info("gateway_started", db_path=db_path, token_ttl_s=access_config.token_ttl_s)

    yield

    if getattr(app.state, "store_group", None):
        await app.state.store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="TaskTracker Gateway",
        version="0.1.0",
        description="TaskTracker 任务管理 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging，CORS 最外层）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    setup_logging()
    setup_logfire(app)

    register_exception_handlers(app)

    app.include_router(auth.router, tags=["auth"])
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(comments.router, tags=["comments"])
    app.include_router(admin.router, tags=["admin"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
