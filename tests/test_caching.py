"""Tests for Redis caching implementation."""

from datetime import date
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from httpx import AsyncClient

from app.core.redis_client import CacheKeys, CacheManager
from app.schemas.appointments import AppointmentFilters, AppointmentStatus


def test_cache_manager_get_json():
    """Test CacheManager get_json method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    # Test cache miss
    mock_redis.get.return_value = None
    result = cache_manager.get_json("test_key")
    assert result is None
    mock_redis.get.assert_called_once_with("test_key")

    # Test cache hit
    mock_redis.reset_mock()
    mock_redis.get.return_value = '[{"start_time": "09:00:00"}]'
    result = cache_manager.get_json("test_key")
    assert result == [{"start_time": "09:00:00"}]


def test_cache_manager_set_json_serializes_dates():
    """Test values with dates and UUIDs are stored as strings."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.set_json("test_key", {"day": date(2025, 6, 10)}) is True
    mock_redis.set.assert_called_once_with("test_key", '{"day": "2025-06-10"}')

    mock_redis.reset_mock()
    assert cache_manager.set_json("test_key", {"id": uuid4()}, ttl=300) is True
    mock_redis.setex.assert_called_once()
    assert mock_redis.setex.call_args.args[1] == 300


def test_cache_failures_are_misses():
    """Test a Redis outage never raises."""
    mock_redis = MagicMock()
    mock_redis.get.side_effect = ConnectionError("redis down")
    mock_redis.setex.side_effect = ConnectionError("redis down")
    mock_redis.keys.side_effect = ConnectionError("redis down")
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.get_json("key") is None
    assert cache_manager.set_json("key", [], ttl=10) is False
    assert cache_manager.invalidate("appointment:list:*") == 0


def test_cache_manager_invalidate():
    """Test invalidation deletes every key matching each pattern."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)
    unit_id = uuid4()

    mock_redis.keys.return_value = [
        f"availability:list:{unit_id}:None:None",
        f"availability:list:{unit_id}:2025-06-01:2025-06-30",
    ]
    mock_redis.delete.return_value = 2

    result = cache_manager.invalidate(CacheKeys.availability_lists(unit_id))

    mock_redis.keys.assert_called_once_with(f"availability:list:{unit_id}:*")
    assert result == 2


def test_cache_keys():
    """Test list keys fall under their invalidation patterns."""
    unit_id = uuid4()
    key = CacheKeys.availability_list(unit_id, date(2025, 6, 1), None)
    assert key == f"availability:list:{unit_id}:2025-06-01:None"
    assert key.startswith(CacheKeys.availability_lists(unit_id)[:-1])

    filters = AppointmentFilters(status=AppointmentStatus.CONFIRMED, unit_id=unit_id)
    assert filters.cache_key().startswith(CacheKeys.APPOINTMENT_LISTS[:-1])
    assert filters.cache_key().endswith(":confirmed")


@pytest.mark.asyncio
async def test_availability_writes_invalidate_unit_lists(
    client: AsyncClient,
    mock_redis: MagicMock,
    unit: dict,
) -> None:
    """Test availability list caching and invalidation."""
    response = await client.get("/api/v1/availabilities/", params={"unit_id": str(unit["id"])})
    assert response.status_code == 200
    mock_redis.setex.assert_called_once()
    assert mock_redis.setex.call_args.args[0] == f"availability:list:{unit['id']}:None:None"

    await client.post(
        "/api/v1/availabilities/",
        json={"unit_id": str(unit["id"]), "attendance_dates": ["2025-06-10"]},
    )

    mock_redis.keys.assert_called_once_with(f"availability:list:{unit['id']}:*")
