"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient + 账户 fixture"""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tasktracker.access import AccessConfig, TokenCodec
from tasktracker.core.models import Role
from tasktracker.core.store import StoreGroup, create_store_group

TEST_SECRET = "gateway-test-secret"
DEFAULT_PASSWORD = "Passw0rd@1"


@dataclass
class Account:
    """测试账户：id + bearer 头"""

    id: int
    email: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest_asyncio.fixture
async def test_app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    db_path = str(tmp_path / "sqlite" / "test.db")
    monkeypatch.setenv("TASKTRACKER_DB_PATH", db_path)
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from tasktracker.gateway.main import create_app

    app = create_app()

    # 手动初始化（绕过 lifespan）
    store_group = await create_store_group(db_path)
    access_config = AccessConfig(jwt_secret=TEST_SECRET, bcrypt_rounds=4)
    app.state.store_group = store_group
    app.state.access_config = access_config
    app.state.token_codec = TokenCodec(access_config.jwt_secret, ttl_s=access_config.token_ttl_s)

    yield app

    await store_group.conn.close()


@pytest.fixture
def stores(test_app) -> StoreGroup:
    return test_app.state.store_group


@pytest.fixture
def password() -> str:
    """满足强度规则的口令"""
    return DEFAULT_PASSWORD


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def register(client: AsyncClient, stores: StoreGroup, password: str):
    """通过 API 注册账户"""

    async def _register(email: str) -> Account:
        resp = await client.post(
            "/api/auth/register",
            json={"email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        user = await stores.user_store.find_by_email(email)
        return Account(id=user.id, email=email, token=resp.json()["token"])

    return _register


@pytest.fixture
def make_task(client: AsyncClient):
    """通过 API 创建任务，返回响应 JSON"""

    async def _make_task(account: Account, **fields) -> dict:
        payload = {"title": "Task", **fields}
        resp = await client.post("/api/tasks", json=payload, headers=account.headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make_task


@pytest_asyncio.fixture
async def alice(register) -> Account:
    return await register("alice@example.com")


@pytest_asyncio.fixture
async def bob(register) -> Account:
    return await register("bob@example.com")


@pytest_asyncio.fixture
async def carol(register) -> Account:
    return await register("carol@example.com")


@pytest_asyncio.fixture
async def admin(register, stores: StoreGroup) -> Account:
    account = await register("admin@example.com")
    await stores.user_store.update_role(account.id, Role.ADMIN)
    return account
