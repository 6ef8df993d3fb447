"""Shared test fixtures for all test modules."""

import json
from collections.abc import Callable, Sequence
from typing import Any

import pytest

try:
    import httpx
except ImportError:
    httpx = None

from dockerstats_exporter.adapters.storage.in_memory import InMemoryMetricsStore
from dockerstats_exporter.core.errors import SourceUnavailableError


class FakeStatsSource:
    """Stats source returning scripted batches, one per call.

    Items in `batches` are either a list of lines or an exception to raise.
    Once the script is exhausted the last item is repeated.
    """

    def __init__(self, batches: Sequence[list[str] | Exception]) -> None:
        self._batches = list(batches)
        self.calls = 0

    def __call__(self) -> list[str]:
        index = min(self.calls, len(self._batches) - 1)
        self.calls += 1
        batch = self._batches[index]
        if isinstance(batch, Exception):
            raise batch
        return list(batch)


@pytest.fixture
def stats_line() -> Callable[..., str]:
    """Factory fixture building one `docker stats` JSON line.

    Keyword arguments override the default record fields.
    """

    def _line(**overrides: Any) -> str:
        record: dict[str, Any] = {
            "BlockIO": "13.5MB / 0B",
            "CPUPerc": "1.50%",
            "Container": "3f1c2a9b7d0e",
            "ID": "3f1c2a9b7d0e5a6b",
            "MemPerc": "0.02%",
            "MemUsage": "9.809MiB / 32GiB",
            "Name": "c1",
            "NetIO": "0B / 0B",
            "PIDs": "5",
        }
        record.update(overrides)
        return json.dumps(record)

    return _line


@pytest.fixture
def store() -> InMemoryMetricsStore:
    """Fixture providing an empty metrics store."""
    return InMemoryMetricsStore()


@pytest.fixture
def fake_source() -> Callable[..., FakeStatsSource]:
    """Factory fixture creating a FakeStatsSource from scripted batches."""

    def _source(*batches: list[str] | Exception) -> FakeStatsSource:
        return FakeStatsSource(batches)

    return _source


@pytest.fixture
def unavailable() -> SourceUnavailableError:
    """A source error as raised by a failing docker invocation."""
    return SourceUnavailableError("docker stats exited with status 1: daemon down")


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            app = create_exporter_app(store)
            async with asgi_test_client(app) as client:
                response = await client.get("/metrics")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
