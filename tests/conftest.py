"""Pytest configuration and shared fixtures."""

import asyncio
import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.push_adapter.models import Installation, TransportResponse  # noqa: E402


class RecordingTransport:
    """Fake transport that records every post and replays canned statuses.

    ``statuses`` is consumed in call order per token field; once a list
    runs out, 200 is returned. Tracks how many posts were in flight at
    once for each platform so tests can assert sequential chunking.
    """

    def __init__(self, statuses=None, delay: float = 0.0):
        self.statuses = {k: list(v) for k, v in (statuses or {}).items()}
        self.delay = delay
        self.calls: list[dict] = []
        self._in_flight: dict[str, int] = {}
        self.max_in_flight: dict[str, int] = {}
        self.max_total_in_flight = 0

    @staticmethod
    def _token_field(body: dict) -> str:
        for key in ("include_ios_tokens", "include_android_reg_ids"):
            if key in body:
                return key
        return ""

    async def post(self, host, path, headers, body):
        field = self._token_field(body)
        self._in_flight[field] = self._in_flight.get(field, 0) + 1
        self.max_in_flight[field] = max(self.max_in_flight.get(field, 0), self._in_flight[field])
        self.max_total_in_flight = max(self.max_total_in_flight, sum(self._in_flight.values()))
        self.calls.append({"host": host, "path": path, "headers": headers, "body": body})
        try:
            await asyncio.sleep(self.delay)
            queue = self.statuses.get(field, [])
            status = queue.pop(0) if queue else 200
            if isinstance(status, Exception):
                raise status
            return TransportResponse(status_code=status, text="" if status < 299 else '{"errors": ["bad"]}')
        finally:
            self._in_flight[field] -= 1

    def calls_for(self, field: str) -> list[dict]:
        return [c for c in self.calls if field in c["body"]]


def make_installations(platform: str, count: int, prefix: str = "") -> list[Installation]:
    prefix = prefix or platform
    return [Installation(device_token=f"{prefix}-{i}", platform=platform) for i in range(count)]


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def push_config():
    return {"oneSignalAppId": "app-default", "oneSignalApiKey": "key-default"}


@pytest.fixture
def multi_tenant_config():
    return {
        "fam": {"oneSignalAppId": "app-fam", "oneSignalApiKey": "key-fam"},
        "work": {"oneSignalAppId": "app-work", "oneSignalApiKey": "key-work"},
        "broken": {"oneSignalAppId": "app-broken"},
    }


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Restore root logger handlers and level after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level

    yield

    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def make_transport():
    return RecordingTransport


@pytest.fixture
def installations():
    return make_installations
