"""Integration tests for profile endpoints."""

from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient

from conftest import api_profile


class TestProfilesEndpoints:

    @pytest.mark.asyncio
    async def test_create_profile(self, client: AsyncClient):
        user_id = str(uuid.uuid4())
        response = await client.post(
            "/api/v1/profiles", json={"id": user_id, "name": "Ayesha", "email": "ayesha@example.com"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["id"] == user_id
        assert data["points"] == 0
        assert data["streak_days"] == 0
        assert data["last_contribution_date"] is None

    @pytest.mark.asyncio
    async def test_duplicate_email_is_409(self, client: AsyncClient):
        body = {"name": "Ayesha", "email": "ayesha@example.com"}
        assert (await client.post("/api/v1/profiles", json=body)).status_code == 201
        response = await client.post("/api/v1/profiles", json=body)
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_get_profile(self, client: AsyncClient):
        user_id = await api_profile(client, "Kamran")
        response = await client.get(f"/api/v1/profiles/{user_id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Kamran"

    @pytest.mark.asyncio
    async def test_points_history_empty(self, client: AsyncClient):
        user_id = await api_profile(client)
        response = await client.get(f"/api/v1/profiles/{user_id}/points")
        assert response.status_code == 200
        assert response.json() == {"entries": [], "total_points": 0}

    @pytest.mark.asyncio
    async def test_user_badges_progress(self, client: AsyncClient):
        user_id = await api_profile(client)
        response = await client.get(f"/api/v1/profiles/{user_id}/badges")
        assert response.status_code == 200
        data = response.json()
        assert data["earned"] == []
        assert data["total_earned"] == 0
        assert data["total_available"] == len(data["progress"])
        assert all(p["current"] == 0 for p in data["progress"])
