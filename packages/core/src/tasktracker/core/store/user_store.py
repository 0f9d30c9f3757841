"""UserStore SQLite 实现"""

from datetime import UTC, datetime

import aiosqlite

from ..models import Page, PageRequest, Role, User

_SELECT_USER = "SELECT id, email, password_hash, role, created_at FROM users"


class SqliteUserStore:
    """UserStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_user(self, email: str, password_hash: str, role: Role) -> User:
        """创建用户记录（email 唯一约束由数据库保证）"""
        now = datetime.now(UTC)
        cursor = await self._conn.execute(
            """
            INSERT INTO users (email, password_hash, role, created_at)
            VALUES (?, ?, ?, ?)
            """,
            (email, password_hash, role.value, now.isoformat()),
        )
        await self._conn.commit()
        return User(
            id=cursor.lastrowid,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=now,
        )

    async def find_by_email(self, email: str) -> User | None:
        """根据邮箱查询用户"""
        cursor = await self._conn.execute(f"{_SELECT_USER} WHERE email = ?", (email,))
        row = await cursor.fetchone()
        return self._row_to_user(row) if row is not None else None

    async def get_user(self, user_id: int) -> User | None:
        """根据 id 查询用户"""
        cursor = await self._conn.execute(f"{_SELECT_USER} WHERE id = ?", (user_id,))
        row = await cursor.fetchone()
        return self._row_to_user(row) if row is not None else None

    async def list_users(self, page_request: PageRequest) -> Page[User]:
        """分页查询用户，按 id 正序"""
        cursor = await self._conn.execute("SELECT COUNT(*) FROM users")
        total = (await cursor.fetchone())[0]

        cursor = await self._conn.execute(
            f"{_SELECT_USER} ORDER BY id ASC LIMIT ? OFFSET ?",
            (page_request.size, page_request.offset),
        )
        rows = await cursor.fetchall()
        return Page[User](
            content=[self._row_to_user(row) for row in rows],
            page=page_request.page,
            size=page_request.size,
            total_elements=total,
        )

    async def update_role(self, user_id: int, role: Role) -> User | None:
        """修改用户角色"""
        cursor = await self._conn.execute(
            "UPDATE users SET role = ? WHERE id = ?",
            (role.value, user_id),
        )
        await self._conn.commit()
        if cursor.rowcount == 0:
            return None
        return await self.get_user(user_id)

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        """将数据库行转换为 User 模型"""
        return User(
            id=row[0],
            email=row[1],
            password_hash=row[2],
            role=row[3],
            created_at=datetime.fromisoformat(row[4]),
        )
