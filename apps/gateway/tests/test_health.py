"""健康检查测试"""

from httpx import AsyncClient


class TestHealth:
    async def test_health(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    async def test_ready(self, client: AsyncClient):
        resp = await client.get("/ready")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ready"
        assert data["checks"]["sqlite"] == "ok"

    async def test_ready_db_closed(self, client: AsyncClient, stores):
        await stores.conn.close()
        resp = await client.get("/ready")
        assert resp.status_code == 503
        assert resp.json()["checks"]["sqlite"].startswith("error")
