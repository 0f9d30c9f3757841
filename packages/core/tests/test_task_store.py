"""TaskStore 测试 -- 持久化、过滤与排序"""

from datetime import UTC, datetime

import pytest
from tasktracker.core.exceptions import InvalidSortError, TaskNotFoundError
from tasktracker.core.models import (
    Comment,
    PageRequest,
    SortDirection,
    SortOrder,
    Task,
    TaskPriority,
    TaskStatus,
    User,
    UserRef,
)
from tasktracker.core.query import compose_filter
from tasktracker.core.store import StoreGroup


async def _create(
    stores: StoreGroup,
    title: str,
    author: User,
    assignee: User | None = None,
    priority: TaskPriority = TaskPriority.MEDIUM,
) -> Task:
    return await stores.task_store.save_task(
        Task(
            title=title,
            priority=priority,
            author=UserRef(id=author.id),
            assignee=UserRef(id=assignee.id) if assignee else None,
        )
    )


class TestSaveAndGet:
    """保存与读取"""

    async def test_insert_assigns_id_and_fills_emails(
        self, core_stores: StoreGroup, alice: User, bob: User
    ):
        task = await _create(core_stores, "Write docs", alice, bob)
        assert task.id is not None
        assert task.author.email == "alice@example.com"
        assert task.assignee.email == "bob@example.com"

    async def test_update_overwrites_row(self, core_stores: StoreGroup, alice: User):
        task = await _create(core_stores, "Draft", alice)
        updated = await core_stores.task_store.save_task(
            task.model_copy(update={"title": "Final", "status": TaskStatus.COMPLETED})
        )
        assert updated.id == task.id
        assert updated.title == "Final"
        assert (await core_stores.task_store.get_task(task.id)).status == TaskStatus.COMPLETED

    async def test_get_missing(self, core_stores: StoreGroup):
        assert await core_stores.task_store.get_task(404) is None

    async def test_update_vanished_row(self, core_stores: StoreGroup, alice: User):
        with pytest.raises(TaskNotFoundError) as exc_info:
            await core_stores.task_store.save_task(
                Task(id=12345, title="ghost", author=UserRef(id=alice.id))
            )
        assert exc_info.value.status_code == 404
        assert exc_info.value.task_id == 12345


class TestDelete:
    """删除"""

    async def test_delete(self, core_stores: StoreGroup, alice: User):
        task = await _create(core_stores, "Temp", alice)
        assert await core_stores.task_store.delete_task(task.id) is True
        assert await core_stores.task_store.get_task(task.id) is None
        assert await core_stores.task_store.delete_task(task.id) is False

    async def test_delete_cascades_comments(self, core_stores: StoreGroup, alice: User):
        task = await _create(core_stores, "With comments", alice)
        await core_stores.comment_store.save_comment(
            Comment(
                text="hi",
                author=UserRef(id=alice.id),
                task_id=task.id,
                created_date=datetime.now(UTC),
            )
        )
        await core_stores.task_store.delete_task(task.id)
        page = await core_stores.comment_store.list_for_task(task.id, PageRequest())
        assert page.total_elements == 0


class TestFindTasks:
    """过滤与分页查询"""

    async def test_union_filter(self, core_stores: StoreGroup, alice: User, bob: User):
        own = await _create(core_stores, "Alice own", alice)
        assigned = await _create(core_stores, "Assigned to alice", bob, alice)
        await _create(core_stores, "Bob only", bob)

        page = await core_stores.task_store.find_tasks(
            compose_filter(author_id=alice.id, assignee_id=alice.id), PageRequest()
        )
        assert page.total_elements == 2
        assert {t.id for t in page.content} == {own.id, assigned.id}

    async def test_unpaged_orders_by_id_desc(self, core_stores: StoreGroup, alice: User):
        first = await _create(core_stores, "first", alice)
        second = await _create(core_stores, "second", alice)

        page = await core_stores.task_store.find_tasks(compose_filter())
        assert [t.id for t in page.content] == [second.id, first.id]
        assert page.total_elements == 2

    async def test_multi_key_sort(self, core_stores: StoreGroup, alice: User):
        await _create(core_stores, "b", alice, priority=TaskPriority.HIGH)
        await _create(core_stores, "a", alice, priority=TaskPriority.HIGH)
        await _create(core_stores, "c", alice, priority=TaskPriority.LOW)

        page = await core_stores.task_store.find_tasks(
            compose_filter(author_id=alice.id),
            PageRequest(
                sort=[
                    SortOrder(field="priority", direction=SortDirection.ASC),
                    SortOrder(field="title", direction=SortDirection.ASC),
                ]
            ),
        )
        # 字典序：HIGH < LOW
        assert [t.title for t in page.content] == ["a", "b", "c"]

    async def test_pagination(self, core_stores: StoreGroup, alice: User):
        for i in range(5):
            await _create(core_stores, f"task {i}", alice)

        page = await core_stores.task_store.find_tasks(
            compose_filter(),
            PageRequest(page=1, size=2, sort=[SortOrder(field="id")]),
        )
        assert [t.title for t in page.content] == ["task 2", "task 3"]
        assert page.total_elements == 5
        assert page.total_pages == 3

    async def test_pages_stable_on_duplicate_sort_keys(
        self, core_stores: StoreGroup, alice: User
    ):
        created = [await _create(core_stores, "same", alice) for _ in range(6)]

        seen: list[int] = []
        for number in range(3):
            page = await core_stores.task_store.find_tasks(
                compose_filter(),
                PageRequest(page=number, size=2, sort=[SortOrder(field="title")]),
            )
            seen.extend(t.id for t in page.content)
        # 同值排序键按 id 升序兜底，各页不重不漏
        assert seen == sorted(t.id for t in created)

    async def test_unknown_sort_field(self, core_stores: StoreGroup):
        with pytest.raises(InvalidSortError):
            await core_stores.task_store.find_tasks(
                compose_filter(), PageRequest(sort=[SortOrder(field="password_hash")])
            )
