"""Tests for rate limiting, tokens and structured logging."""

import json
import logging
import warnings

import pytest
import redis.asyncio as redis
from starlette.requests import Request

from chargeslot.core import middleware
from chargeslot.core.exceptions import (
    AuthenticationError,
    ConflictError,
    RateLimitExceeded,
    ValidationError,
)
from chargeslot.core.logging import JSONFormatter
from chargeslot.core.middleware import RateLimiter
from chargeslot.core.security import create_access_token, create_user_token, verify_token


class FakePipeline:
    """Enough of a Redis pipeline for the sliding window."""

    def __init__(self, store: dict[str, dict[str, float]]):
        self.store = store
        self.commands = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def zremrangebyscore(self, key, low, high):
        self.commands.append(("zrem", key, low, high))

    async def zcard(self, key):
        self.commands.append(("zcard", key))

    async def zadd(self, key, mapping):
        self.commands.append(("zadd", key, mapping))

    async def expire(self, key, seconds):
        self.commands.append(("expire", key))

    async def execute(self):
        results = []
        for command in self.commands:
            name, key = command[0], command[1]
            members = self.store.setdefault(key, {})
            if name == "zrem":
                for member, score in list(members.items()):
                    if command[2] <= score <= command[3]:
                        del members[member]
                results.append(None)
            elif name == "zcard":
                results.append(len(members))
            elif name == "zadd":
                members.update(command[2])
                results.append(1)
            else:
                results.append(True)
        self.commands = []
        return results


class FakeRedis:
    def __init__(self):
        self.store: dict[str, dict[str, float]] = {}

    def pipeline(self, transaction: bool = True):
        return FakePipeline(self.store)


class BrokenRedis:
    def pipeline(self, transaction: bool = True):
        raise redis.ConnectionError("connection refused")


def make_request(host: str = "10.0.0.1") -> Request:
    return Request({"type": "http", "method": "POST", "path": "/", "headers": [], "client": (host, 1234)})


@pytest.fixture
def production(monkeypatch):
    monkeypatch.setattr(middleware.settings, "environment", "production")


class TestRateLimiter:
    async def test_skipped_in_development(self):
        limiter = RateLimiter(requests_per_minute=1, key_prefix="test")
        limiter._redis = BrokenRedis()

        await limiter(make_request())
        await limiter(make_request())

    async def test_blocks_after_limit(self, production):
        limiter = RateLimiter(requests_per_minute=2, key_prefix="booking")
        limiter._redis = FakeRedis()

        await limiter(make_request())
        await limiter(make_request())
        with pytest.raises(RateLimitExceeded):
            await limiter(make_request())

    async def test_clients_are_counted_separately(self, production):
        limiter = RateLimiter(requests_per_minute=1, key_prefix="booking")
        limiter._redis = FakeRedis()

        await limiter(make_request("10.0.0.1"))
        await limiter(make_request("10.0.0.2"))

    async def test_fails_open_without_redis(self, production, caplog):
        limiter = RateLimiter(requests_per_minute=1, key_prefix="booking")
        limiter._redis = BrokenRedis()

        with caplog.at_level(logging.WARNING):
            await limiter(make_request())

        assert "unavailable" in caplog.text


class TestTokens:
    def test_user_token_round_trip(self):
        payload = verify_token(create_user_token(7, "driver@example.com"))
        assert payload["sub"] == "7"
        assert payload["email"] == "driver@example.com"

    def test_wrong_type(self):
        token = create_access_token({"sub": "7"})
        with pytest.raises(AuthenticationError):
            verify_token(token, token_type="refresh")

    def test_garbage(self):
        with pytest.raises(AuthenticationError) as exc_info:
            verify_token("not-a-token")
        assert exc_info.value.status_code == 401


def test_json_formatter():
    record = logging.LogRecord(
        "chargeslot.services.booking_service", logging.INFO, __file__, 10,
        "Booking %s created", (5,), None,
    )

    entry = json.loads(JSONFormatter().format(record))

    assert entry["level"] == "INFO"
    assert entry["logger"] == "chargeslot.services.booking_service"
    assert entry["message"] == "Booking 5 created"


def test_validation_errors_raise_no_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        errors = [ValidationError("Timeslot must be in the future."), ConflictError("Taken")]

    assert [e.status_code for e in errors] == [422, 422]
