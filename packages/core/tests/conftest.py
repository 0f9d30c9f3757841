"""packages/core 测试配置 -- 核心层 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from tasktracker.core.models import Role, User
from tasktracker.core.store import StoreGroup, create_store_group


@pytest_asyncio.fixture
async def core_stores(tmp_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """核心层已初始化的 StoreGroup"""
    group = await create_store_group(str(tmp_path / "sqlite" / "core_test.db"))
    yield group
    await group.conn.close()


@pytest_asyncio.fixture
async def alice(core_stores: StoreGroup) -> User:
    return await core_stores.user_store.create_user("alice@example.com", "hash-a", Role.USER)


@pytest_asyncio.fixture
async def bob(core_stores: StoreGroup) -> User:
    return await core_stores.user_store.create_user("bob@example.com", "hash-b", Role.USER)
