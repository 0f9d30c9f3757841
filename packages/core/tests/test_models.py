"""Domain Models 单元测试

测试内容：
1. 枚举序列化/反序列化
2. Pydantic 模型校验（长度上限、默认值）
3. Principal 不可变与角色判断
4. 分页模型
"""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError
from tasktracker.core.config import TITLE_MAX_LENGTH
from tasktracker.core.models import (
    Comment,
    Page,
    PageRequest,
    Principal,
    Role,
    Task,
    TaskPriority,
    TaskStatus,
    User,
    UserRef,
)


class TestEnums:
    """枚举序列化/反序列化测试"""

    def test_role_values(self):
        assert Role.USER == "USER"
        assert Role.ADMIN == "ADMIN"

    def test_task_status_from_string(self):
        assert TaskStatus("IN_PROGRESS") == TaskStatus.IN_PROGRESS

    def test_unknown_priority_rejected(self):
        with pytest.raises(ValueError):
            TaskPriority("URGENT")


class TestTask:
    """Task 模型校验"""

    def test_defaults(self):
        task = Task(title="Write docs", author=UserRef(id=1))
        assert task.id is None
        assert task.status == TaskStatus.PENDING
        assert task.priority == TaskPriority.MEDIUM
        assert task.assignee is None

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            Task(title="", author=UserRef(id=1))

    def test_title_length_limit(self):
        Task(title="x" * TITLE_MAX_LENGTH, author=UserRef(id=1))
        with pytest.raises(ValidationError):
            Task(title="x" * (TITLE_MAX_LENGTH + 1), author=UserRef(id=1))

    def test_enum_values_from_json(self):
        task = Task.model_validate(
            {"title": "t", "status": "COMPLETED", "priority": "HIGH", "author": {"id": 3}}
        )
        assert task.status == TaskStatus.COMPLETED
        assert task.priority == TaskPriority.HIGH
        assert task.author.id == 3


class TestPrincipal:
    """Principal 测试"""

    def test_from_user(self):
        user = User(
            id=7,
            email="carol@example.com",
            password_hash="secret",
            role=Role.ADMIN,
            created_at=datetime.now(UTC),
        )
        principal = Principal.from_user(user)
        assert principal.id == 7
        assert principal.identity == "carol@example.com"
        assert principal.is_admin

    def test_frozen(self):
        principal = Principal(id=1, identity="a@example.com", role=Role.USER)
        with pytest.raises(ValidationError):
            principal.role = Role.ADMIN

    def test_as_ref(self):
        principal = Principal(id=4, identity="d@example.com", role=Role.USER)
        assert principal.as_ref() == UserRef(id=4, email="d@example.com")

    def test_password_hash_not_in_repr(self):
        user = User(
            id=1, email="a@example.com", password_hash="s3cr3t", created_at=datetime.now(UTC)
        )
        assert "s3cr3t" not in repr(user)


class TestPaging:
    """分页模型"""

    def test_offset(self):
        assert PageRequest(page=2, size=10).offset == 20

    def test_size_bounds(self):
        with pytest.raises(ValidationError):
            PageRequest(size=0)
        with pytest.raises(ValidationError):
            PageRequest(size=101)

    def test_total_pages_serialized(self):
        page = Page[Comment](content=[], page=0, size=10, total_elements=21)
        assert page.total_pages == 3
        assert page.model_dump()["total_pages"] == 3

    def test_total_pages_empty(self):
        assert Page[Task](content=[], page=0, size=10, total_elements=0).total_pages == 0
