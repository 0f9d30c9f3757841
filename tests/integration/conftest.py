"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tasktracker.access import AccessConfig, TokenCodec
from tasktracker.core.store import create_store_group


@pytest.fixture
def integration_db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    db_path = str(tmp_path / "integration.db")
    monkeypatch.setenv("TASKTRACKER_DB_PATH", db_path)
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")
    return db_path


@pytest.fixture
def access_config() -> AccessConfig:
    return AccessConfig(jwt_secret="integration-secret", bcrypt_rounds=4)


@pytest.fixture
def build_app(integration_db_path: str, access_config: AccessConfig):
    """构造一个绕过 lifespan、直接挂好状态的 app，可多次调用模拟重启"""
    from tasktracker.gateway.main import create_app

    async def _build():
        app = create_app()
        app.state.store_group = await create_store_group(integration_db_path)
        app.state.access_config = access_config
        app.state.token_codec = TokenCodec(access_config.jwt_secret)
        return app

    return _build


@pytest_asyncio.fixture
async def integration_app(build_app):
    """集成测试用 FastAPI app"""
    app = await build_app()
    yield app
    await app.state.store_group.conn.close()


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
