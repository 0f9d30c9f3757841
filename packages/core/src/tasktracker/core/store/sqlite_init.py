"""SQLite 数据库初始化

PRAGMA 配置 + users / tasks / comments 三张表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# users 表 DDL
_USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    email          TEXT NOT NULL UNIQUE,
    password_hash  TEXT NOT NULL,
    role           TEXT NOT NULL DEFAULT 'USER',
    created_at     TEXT NOT NULL
);
"""

# tasks 表 DDL
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    title        TEXT NOT NULL,
    description  TEXT,
    status       TEXT NOT NULL DEFAULT 'PENDING',
    priority     TEXT NOT NULL DEFAULT 'MEDIUM',
    author_id    INTEGER NOT NULL,
    assignee_id  INTEGER,

    FOREIGN KEY (author_id) REFERENCES users(id),
    FOREIGN KEY (assignee_id) REFERENCES users(id)
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_author_id ON tasks(author_id);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_assignee_id ON tasks(assignee_id);",
]

# comments 表 DDL（任务删除时级联删除评论）
_COMMENTS_DDL = """
CREATE TABLE IF NOT EXISTS comments (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    task_id       INTEGER NOT NULL,
    author_id     INTEGER NOT NULL,
    text          TEXT NOT NULL,
    created_date  TEXT NOT NULL,

    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE,
    FOREIGN KEY (author_id) REFERENCES users(id)
);
"""

_COMMENTS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_comments_task_created ON comments(task_id, created_date);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    await conn.execute(_USERS_DDL)
    await conn.execute(_TASKS_DDL)
    await conn.execute(_COMMENTS_DDL)

    for idx_sql in _TASKS_INDEXES + _COMMENTS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()
