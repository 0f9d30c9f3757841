"""CLI 入口模块 -- python -m tasktracker.core <command>

支持的命令：
  promote-admin <email>  将已注册用户提升为 ADMIN
  demote-admin <email>   将用户降级为 USER
"""

import asyncio
import sys

from .config import get_db_path
from .models import Role

_COMMANDS = {
    "promote-admin": Role.ADMIN,
    "demote-admin": Role.USER,
}


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 3 or sys.argv[1] not in _COMMANDS:
        print("用法: python -m tasktracker.core <command> <email>")
        print("命令:")
        print("  promote-admin <email>  将已注册用户提升为 ADMIN")
        print("  demote-admin <email>   将用户降级为 USER")
        sys.exit(1)

    command, email = sys.argv[1], sys.argv[2]
    ok = asyncio.run(change_role(email, _COMMANDS[command]))
    if not ok:
        sys.exit(1)


async def change_role(email: str, role: Role) -> bool:
    """修改指定邮箱用户的角色

    Returns:
        True 如果用户存在且修改成功
    """
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    try:
        user = await store_group.user_store.find_by_email(email)
        if user is None:
            print(f"用户不存在: {email}")
            return False
        await store_group.user_store.update_role(user.id, role)
        print(f"已将 {email} 的角色设置为 {role.value}")
        return True
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
