"""Tests for the Redis cache decorator."""

import json
from unittest.mock import AsyncMock, patch

from breathewatch.data.cache import _cache_key, cached, invalidate


class MapSource:
    def __init__(self):
        self.calls = 0

    @cached("test:map", ttl_seconds=60)
    async def list_for_year(self, year: int) -> list[dict]:
        self.calls += 1
        return [{"neighborhood": "Harlem", "year": year}]


class TestCacheKey:
    def test_deterministic(self):
        assert _cache_key("p", 2023) == _cache_key("p", 2023)
        assert _cache_key("p", 2023) != _cache_key("p", 2022)
        assert _cache_key("p", 2023).startswith("breathewatch:p:")


class TestCached:
    async def test_hit_skips_call(self):
        fake = AsyncMock()
        fake.get.return_value = json.dumps([{"neighborhood": "Astoria"}])
        source = MapSource()
        with patch("breathewatch.data.cache.get_redis", new_callable=AsyncMock, return_value=fake):
            result = await source.list_for_year(2023)
        assert result == [{"neighborhood": "Astoria"}]
        assert source.calls == 0

    async def test_miss_stores_result(self):
        fake = AsyncMock()
        fake.get.return_value = None
        source = MapSource()
        with patch("breathewatch.data.cache.get_redis", new_callable=AsyncMock, return_value=fake):
            result = await source.list_for_year(2023)
        assert result == [{"neighborhood": "Harlem", "year": 2023}]
        key, ttl, payload = fake.setex.await_args.args
        assert key == _cache_key("test:map", 2023)
        assert ttl == 60
        assert json.loads(payload) == result

    async def test_redis_down_falls_through(self):
        source = MapSource()
        with patch("breathewatch.data.cache.get_redis", new_callable=AsyncMock, side_effect=ConnectionError):
            result = await source.list_for_year(2023)
        assert result[0]["neighborhood"] == "Harlem"
        assert source.calls == 1

    async def test_invalidate_swallows_outage(self):
        with patch("breathewatch.data.cache.get_redis", new_callable=AsyncMock, side_effect=ConnectionError):
            await invalidate("test:map")
