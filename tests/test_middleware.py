"""Middleware tests: request ID, CORS, error mapping."""

import uuid

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_request_id_generated(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert "x-request-id" in response.headers
    assert len(response.headers["x-request-id"]) == 36  # UUID format


@pytest.mark.asyncio
async def test_request_id_preserved(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-Id": "test-abc-123"})
    assert response.headers["x-request-id"] == "test-abc-123"


@pytest.mark.asyncio
async def test_writes_pass_without_rate_limiter(client: AsyncClient) -> None:
    """With no Redis configured the limiter lets writes through unmetered."""
    response = await client.post("/api/v1/profiles", json={"name": "Zara", "email": "zara@example.com"})
    assert response.status_code == 201
    assert "x-ratelimit-limit" not in response.headers


@pytest.mark.asyncio
async def test_cors_preflight(client: AsyncClient) -> None:
    response = await client.options(
        "/api/v1/profiles",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "X-User-Id",
        },
    )
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


@pytest.mark.asyncio
async def test_not_found_maps_to_404(client: AsyncClient) -> None:
    response = await client.get(f"/api/v1/profiles/{uuid.uuid4()}")
    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


@pytest.mark.asyncio
async def test_request_validation_maps_to_422(client: AsyncClient) -> None:
    response = await client.get("/api/v1/profiles/not-a-uuid")
    assert response.status_code == 422
    assert response.json()["detail"] == "Validation error"


@pytest.mark.asyncio
async def test_missing_acting_user_is_422(client: AsyncClient) -> None:
    response = await client.post(f"/api/v1/variant-links/{uuid.uuid4()}/votes", json={"vote_type": "correct"})
    assert response.status_code == 422


class _FakePipeline:
    def __init__(self, counts: dict[str, int]) -> None:
        self.counts = counts
        self.key = ""

    def incr(self, key: str) -> None:
        self.key = key
        self.counts[key] = self.counts.get(key, 0) + 1

    def expire(self, key: str, seconds: int) -> None:
        pass

    async def execute(self) -> list[object]:
        return [self.counts[self.key], True]


class _FakeRedis:
    def __init__(self) -> None:
        self.counts: dict[str, int] = {}

    def pipeline(self) -> _FakePipeline:
        return _FakePipeline(self.counts)


@pytest.fixture
def limited_client(monkeypatch):
    from fastapi import FastAPI
    from httpx import ASGITransport

    from boli.middleware import rate_limit
    from boli.middleware.rate_limit import RateLimitMiddleware

    fake = _FakeRedis()
    monkeypatch.setattr(rate_limit, "get_optional_redis", lambda: fake)

    app = FastAPI()

    @app.get("/read")
    async def read() -> dict[str, bool]:
        return {"ok": True}

    @app.post("/write")
    async def write() -> dict[str, bool]:
        return {"ok": True}

    app.add_middleware(RateLimitMiddleware, requests_per_window=2, window_seconds=60)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_rate_limit_blocks_excess_writes(limited_client: AsyncClient) -> None:
    async with limited_client as ac:
        headers = {"X-User-Id": str(uuid.uuid4())}
        first = await ac.post("/write", headers=headers)
        assert first.headers["x-ratelimit-remaining"] == "1"
        await ac.post("/write", headers=headers)
        blocked = await ac.post("/write", headers=headers)

        assert blocked.status_code == 429
        assert blocked.headers["retry-after"] == "60"

        # A different acting user has their own window.
        other = await ac.post("/write", headers={"X-User-Id": str(uuid.uuid4())})
        assert other.status_code == 200


@pytest.mark.asyncio
async def test_rate_limit_ignores_reads(limited_client: AsyncClient) -> None:
    async with limited_client as ac:
        for _ in range(5):
            response = await ac.get("/read")
            assert response.status_code == 200
            assert "x-ratelimit-limit" not in response.headers
