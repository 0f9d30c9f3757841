"""packages/access 测试配置 -- Principal / Task 构造辅助"""

from datetime import UTC, datetime

import pytest
from tasktracker.core.models import Principal, Role, Task, TaskPriority, TaskStatus, UserRef


class FixedClock:
    """可手动推进的测试时钟"""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def admin() -> Principal:
    return Principal(id=100, identity="admin@example.com", role=Role.ADMIN)


@pytest.fixture
def author() -> Principal:
    return Principal(id=1, identity="author@example.com", role=Role.USER)


@pytest.fixture
def assignee() -> Principal:
    return Principal(id=2, identity="assignee@example.com", role=Role.USER)


@pytest.fixture
def stranger() -> Principal:
    return Principal(id=3, identity="stranger@example.com", role=Role.USER)


@pytest.fixture
def task() -> Task:
    """author 1，assignee 2"""
    return Task(
        id=10,
        title="Original",
        description="original description",
        status=TaskStatus.IN_PROGRESS,
        priority=TaskPriority.LOW,
        author=UserRef(id=1, email="author@example.com"),
        assignee=UserRef(id=2, email="assignee@example.com"),
    )
