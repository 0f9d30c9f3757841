"""TaskStore SQLite 实现

读取时关联 users 表填充 author / assignee 的邮箱。
"""

import aiosqlite

from ..exceptions import InvalidSortError, TaskNotFoundError
from ..models import Page, PageRequest, SortOrder, Task, UserRef
from ..query import TASK_SORT_FIELDS, TaskFilter

_SELECT_TASK = """
SELECT t.id, t.title, t.description, t.status, t.priority,
       t.author_id, a.email, t.assignee_id, s.email
FROM tasks t
JOIN users a ON a.id = t.author_id
LEFT JOIN users s ON s.id = t.assignee_id
"""


def _order_by(sort: list[SortOrder]) -> str:
    """将排序键渲染为 ORDER BY 子句（列名来自白名单）

    未按 id 排序时追加 t.id 作为最终键，保证分页顺序稳定。
    """
    parts = []
    for order in sort:
        column = TASK_SORT_FIELDS.get(order.field)
        if column is None:
            raise InvalidSortError(f"Unknown sort field '{order.field}'")
        parts.append(f"{column} {order.direction.value}")
    if not any(order.field == "id" for order in sort):
        parts.append("t.id ASC")
    return " ORDER BY " + ", ".join(parts)


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def get_task(self, task_id: int) -> Task | None:
        """根据 id 查询任务"""
        cursor = await self._conn.execute(f"{_SELECT_TASK} WHERE t.id = ?", (task_id,))
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def save_task(self, task: Task) -> Task:
        """保存任务：id 为 None 时插入，否则整行更新"""
        assignee_id = task.assignee.id if task.assignee is not None else None
        if task.id is None:
            cursor = await self._conn.execute(
                """
                INSERT INTO tasks (title, description, status, priority, author_id, assignee_id)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    task.title,
                    task.description,
                    task.status.value,
                    task.priority.value,
                    task.author.id,
                    assignee_id,
                ),
            )
            task_id = cursor.lastrowid
        else:
            await self._conn.execute(
                """
                UPDATE tasks
                SET title = ?, description = ?, status = ?, priority = ?,
                    author_id = ?, assignee_id = ?
                WHERE id = ?
                """,
                (
                    task.title,
                    task.description,
                    task.status.value,
                    task.priority.value,
                    task.author.id,
                    assignee_id,
                    task.id,
                ),
            )
            task_id = task.id
        await self._conn.commit()

        saved = await self.get_task(task_id)
        if saved is None:
            # UPDATE 命中的行在提交前已被并发删除
            raise TaskNotFoundError(task_id)
        return saved

    async def delete_task(self, task_id: int) -> bool:
        """删除任务（评论由外键级联删除）"""
        cursor = await self._conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        await self._conn.commit()
        return cursor.rowcount > 0

    async def find_tasks(
        self,
        task_filter: TaskFilter,
        page_request: PageRequest | None = None,
    ) -> Page[Task]:
        """按过滤谓词查询任务

        Args:
            task_filter: compose_filter() 构造的过滤谓词
            page_request: 分页请求，None 表示不分页（按 id 倒序返回全部）

        Returns:
            Page[Task]
        """
        where, params = task_filter.to_sql()
        where_sql = f" WHERE {where}" if where else ""

        cursor = await self._conn.execute(
            f"SELECT COUNT(*) FROM tasks t{where_sql}", params
        )
        total = (await cursor.fetchone())[0]

        if page_request is None:
            cursor = await self._conn.execute(
                f"{_SELECT_TASK}{where_sql} ORDER BY t.id DESC", params
            )
            rows = await cursor.fetchall()
            return Page[Task](
                content=[self._row_to_task(row) for row in rows],
                page=0,
                size=len(rows),
                total_elements=total,
            )

        cursor = await self._conn.execute(
            f"{_SELECT_TASK}{where_sql}{_order_by(page_request.sort)} LIMIT ? OFFSET ?",
            (*params, page_request.size, page_request.offset),
        )
        rows = await cursor.fetchall()
        return Page[Task](
            content=[self._row_to_task(row) for row in rows],
            page=page_request.page,
            size=page_request.size,
            total_elements=total,
        )

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        assignee = UserRef(id=row[7], email=row[8]) if row[7] is not None else None
        return Task(
            id=row[0],
            title=row[1],
            description=row[2],
            status=row[3],
            priority=row[4],
            author=UserRef(id=row[5], email=row[6]),
            assignee=assignee,
        )
