"""
Unit tests for RedisStorage with a mocked redis.asyncio client.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from src.core.storage import ConnectionError, DataError, RedisStorage


@pytest.fixture
def client():
    mock_client = AsyncMock()
    mock_client.setex.return_value = True
    mock_client.set.return_value = True
    return mock_client


@pytest.fixture
def storage(client):
    redis_storage = RedisStorage({"host": "localhost", "port": 6379})
    redis_storage.client = client
    redis_storage.is_connected = True
    return redis_storage


class TestRedisStorage:
    """Test cache operations against a mocked client."""

    @pytest.mark.asyncio
    async def test_set_serializes_and_applies_ttl(self, storage, client):
        record = {"blockNumber": 100, "rate": "1100000000000000000000000000"}

        assert await storage.set("ethereum_aavev3stata_state_0xabc", record, ttl=60) is True

        client.setex.assert_awaited_once_with(
            "ethereum_aavev3stata_state_0xabc", 60, json.dumps(record, default=str)
        )
        client.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_set_without_ttl(self, storage, client):
        await storage.set("key", "value")

        client.set.assert_awaited_once_with("key", "value")
        client.setex.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_deserializes_json(self, storage, client):
        client.get.return_value = '{"blockNumber": 100, "rate": "5"}'

        assert await storage.get("key") == {"blockNumber": 100, "rate": "5"}

    @pytest.mark.asyncio
    async def test_get_returns_plain_strings(self, storage, client):
        client.get.return_value = "not json"

        assert await storage.get("key") == "not json"

    @pytest.mark.asyncio
    async def test_get_missing_key(self, storage, client):
        client.get.return_value = None

        assert await storage.get("key") is None

    @pytest.mark.asyncio
    async def test_client_failure_is_a_data_error(self, storage, client):
        client.get.side_effect = OSError("connection reset")

        with pytest.raises(DataError):
            await storage.get("key")

    @pytest.mark.asyncio
    async def test_requires_connection(self):
        redis_storage = RedisStorage({})

        with pytest.raises(ConnectionError):
            await redis_storage.get("key")
        with pytest.raises(ConnectionError):
            await redis_storage.set("key", "value")


class TestConnection:
    """Test connect, health check and disconnect."""

    @pytest.mark.asyncio
    async def test_connect_pings_and_disconnect_closes(self, client):
        client.ping.return_value = True
        redis_storage = RedisStorage({"host": "redis", "password": "secret"})

        with patch("src.core.storage.redis.redis.ConnectionPool") as pool, \
                patch("src.core.storage.redis.redis.Redis", return_value=client):
            await redis_storage.connect()

        assert redis_storage.is_connected is True
        assert pool.call_args.kwargs["host"] == "redis"
        assert pool.call_args.kwargs["password"] == "secret"
        assert await redis_storage.health_check() is True

        await redis_storage.disconnect()
        client.aclose.assert_awaited_once()
        assert redis_storage.is_connected is False

    @pytest.mark.asyncio
    async def test_failed_ping_is_a_connection_error(self, client):
        client.ping.side_effect = OSError("refused")
        redis_storage = RedisStorage({})

        with patch("src.core.storage.redis.redis.ConnectionPool"), \
                patch("src.core.storage.redis.redis.Redis", return_value=client):
            with pytest.raises(ConnectionError):
                await redis_storage.connect()

        assert redis_storage.is_connected is False
