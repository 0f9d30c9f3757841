"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、运行环境、分页默认值等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKTRACKER_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKTRACKER_DB_PATH",
        str(_get_base_dir() / "sqlite" / "tasktracker.db"),
    )


def get_app_env() -> str:
    """获取运行环境（development 时错误响应携带堆栈）"""
    return os.environ.get("TASKTRACKER_APP_ENV", "production")


def is_development() -> bool:
    """是否处于开发模式"""
    return get_app_env().lower() == "development"


# 分页默认页大小
DEFAULT_PAGE_SIZE: int = int(os.environ.get("TASKTRACKER_DEFAULT_PAGE_SIZE", "10"))

# 分页最大页大小
MAX_PAGE_SIZE: int = 100

# 任务标题长度上限
TITLE_MAX_LENGTH: int = 1024

# 任务描述 / 评论正文长度上限
TEXT_MAX_LENGTH: int = 65536
