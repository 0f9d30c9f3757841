"""CommentStore SQLite 实现 -- append-only"""

from datetime import datetime

import aiosqlite

from ..models import Comment, Page, PageRequest, UserRef

_SELECT_COMMENT = """
SELECT c.id, c.text, c.author_id, u.email, c.task_id, c.created_date
FROM comments c
JOIN users u ON u.id = c.author_id
"""


class SqliteCommentStore:
    """CommentStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def save_comment(self, comment: Comment) -> Comment:
        """追加评论，返回带 id 的 Comment"""
        cursor = await self._conn.execute(
            """
            INSERT INTO comments (task_id, author_id, text, created_date)
            VALUES (?, ?, ?, ?)
            """,
            (
                comment.task_id,
                comment.author.id,
                comment.text,
                comment.created_date.isoformat(),
            ),
        )
        await self._conn.commit()
        return comment.model_copy(update={"id": cursor.lastrowid})

    async def list_for_task(self, task_id: int, page_request: PageRequest) -> Page[Comment]:
        """分页查询指定任务的评论，按 created_date 正序"""
        cursor = await self._conn.execute(
            "SELECT COUNT(*) FROM comments WHERE task_id = ?", (task_id,)
        )
        total = (await cursor.fetchone())[0]

        cursor = await self._conn.execute(
            f"""{_SELECT_COMMENT}
            WHERE c.task_id = ?
            ORDER BY c.created_date ASC, c.id ASC
            LIMIT ? OFFSET ?
            """,
            (task_id, page_request.size, page_request.offset),
        )
        rows = await cursor.fetchall()
        return Page[Comment](
            content=[self._row_to_comment(row) for row in rows],
            page=page_request.page,
            size=page_request.size,
            total_elements=total,
        )

    @staticmethod
    def _row_to_comment(row: aiosqlite.Row) -> Comment:
        """将数据库行转换为 Comment 模型"""
        return Comment(
            id=row[0],
            text=row[1],
            author=UserRef(id=row[2], email=row[3]),
            task_id=row[4],
            created_date=datetime.fromisoformat(row[5]),
        )
