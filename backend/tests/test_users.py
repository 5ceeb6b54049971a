"""
Tests for user endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_user(client: AsyncClient):
    response = await client.post("/api/v1/users/", json={"name": "Alice", "email": "alice@example.com"})
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Alice"
    assert data["email"] == "alice@example.com"
    assert "id" in data


@pytest.mark.asyncio
async def test_create_user_duplicate_email(client: AsyncClient, owner):
    response = await client.post("/api/v1/users/", json={"name": "Other", "email": owner.email})
    assert response.status_code == 409
    assert response.json()["error"] == "CONFLICT"


@pytest.mark.asyncio
async def test_create_user_invalid_email(client: AsyncClient):
    response = await client.post("/api/v1/users/", json={"name": "Bob", "email": "not-an-email"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_user(client: AsyncClient, booker):
    response = await client.get(f"/api/v1/users/{booker.id}")
    assert response.status_code == 200
    assert response.json()["email"] == "booker@example.com"


@pytest.mark.asyncio
async def test_get_unknown_user(client: AsyncClient):
    response = await client.get("/api/v1/users/999")
    assert response.status_code == 404
    assert response.json()["detail"] == "User with id 999 not found"


@pytest.mark.asyncio
async def test_update_user(client: AsyncClient, booker, owner):
    response = await client.patch(f"/api/v1/users/{booker.id}", json={"name": "Renamed"})
    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"
    assert response.json()["email"] == "booker@example.com"

    response = await client.patch(f"/api/v1/users/{booker.id}", json={"email": owner.email})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_list_and_delete_users(client: AsyncClient, owner, booker, stranger):
    response = await client.get("/api/v1/users/", params={"size": 2})
    assert [u["id"] for u in response.json()] == [owner.id, booker.id]

    response = await client.delete(f"/api/v1/users/{stranger.id}")
    assert response.status_code == 204

    response = await client.get(f"/api/v1/users/{stranger.id}")
    assert response.status_code == 404
