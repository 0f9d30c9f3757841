"""structlog 配置模块

TASKTRACKER_LOG_FORMAT=json 时输出结构化 JSON（生产），否则 pretty print（开发）。
所有日志在渲染前都会经过敏感字段脱敏。
Logfire APM：LOGFIRE_SEND_TO_LOGFIRE 环境变量控制，false 时仅本地日志。
"""

import logging
import os

import structlog
from fastapi import FastAPI

# 这些键的值永远不写入日志
SENSITIVE_KEYS = frozenset({"password", "password_hash", "token", "authorization", "jwt_secret"})

# 第三方库日志过于啰嗦，单独调高级别
_QUIET_LOGGERS = ("aiosqlite", "uvicorn.access", "httpx")


def redact_sensitive(
    logger: object, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """structlog processor：遮蔽敏感字段"""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def setup_logging() -> None:
    """初始化 structlog 配置

    环境变量:
        TASKTRACKER_LOG_FORMAT: "json" 或 "dev"（默认）
        TASKTRACKER_LOG_LEVEL: 日志级别（默认 INFO）
    """
    log_format = os.environ.get("TASKTRACKER_LOG_FORMAT", "dev")
    log_level = os.environ.get("TASKTRACKER_LOG_LEVEL", "INFO")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_sensitive,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(
            ensure_ascii=False
        )
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # 标准库 logging 也走同一条处理链
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logfire(app: FastAPI) -> None:
    """Logfire 可选初始化

    LOGFIRE_SEND_TO_LOGFIRE=true 时启用（需要 LOGFIRE_TOKEN），默认关闭。
    """
    send_to_logfire = os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower()
    if send_to_logfire != "true":
        return
    try:
        import logfire

        logfire.configure(service_name="tasktracker-gateway")
        logfire.instrument_fastapi(app)
    except Exception:
        # APM 初始化失败不影响请求处理
        structlog.get_logger().warning(
            "logfire_init_failed",
            message="Logfire 初始化失败，仅保留本地日志",
        )
