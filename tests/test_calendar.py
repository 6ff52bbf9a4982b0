"""Tests for calendar endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_holidays(client: AsyncClient) -> None:
    """Test the holidays of a year."""
    response = await client.get("/api/v1/calendar/holidays", params={"year": 2025})

    assert response.status_code == 200
    data = response.json()
    assert data["year"] == 2025
    assert len(data["items"]) == 11
    assert data["items"][0] == {
        "date": "2025-01-01",
        "name": "Confraternização Universal",
        "kind": "fixed",
    }
    moving = {item["date"] for item in data["items"] if item["kind"] == "moving"}
    assert moving == {"2025-03-04", "2025-04-18", "2025-06-19"}


@pytest.mark.asyncio
async def test_list_holidays_rejects_out_of_range_year(client: AsyncClient) -> None:
    """Test years outside the supported Gregorian range."""
    response = await client.get("/api/v1/calendar/holidays", params={"year": 1200})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_business_days(client: AsyncClient) -> None:
    """Test business days for a weekday subset."""
    response = await client.get(
        "/api/v1/calendar/business-days",
        params=[
            ("weekdays", "tuesday"),
            ("weekdays", "thursday"),
            ("months", "1"),
            ("start", "2025-03-01"),
        ],
    )

    assert response.status_code == 200
    data = response.json()
    assert data["start"] == "2025-03-01"
    assert data["end"] == "2025-04-01"
    assert data["count"] == 7
    assert "2025-03-04" not in data["dates"]


@pytest.mark.asyncio
async def test_business_days_default_week(client: AsyncClient) -> None:
    """Test the default weekdays are Monday to Saturday."""
    response = await client.get(
        "/api/v1/calendar/business-days",
        params={"months": 1, "start": "2025-01-01"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 26
    assert "sunday" not in data["weekdays"]
