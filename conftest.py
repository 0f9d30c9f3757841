"""全局 pytest 配置"""

import pytest


@pytest.fixture(autouse=True)
def _non_development_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """测试默认运行在非开发模式，错误响应不带 stack_trace"""
    monkeypatch.setenv("TASKTRACKER_APP_ENV", "test")
    monkeypatch.delenv("TASKTRACKER_CORS_ORIGINS", raising=False)
