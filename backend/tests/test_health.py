"""
Tests for service endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["cache"]["status"] == "disabled"


@pytest.mark.asyncio
async def test_metrics_exposes_booking_counters(client: AsyncClient, as_user, booker, item, now):
    await client.get("/api/v1/bookings/", headers=as_user(booker))

    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "booking_queries_total" in response.text


@pytest.mark.asyncio
async def test_root(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 200
    assert "docs" in response.json()
