"""Integration tests for the ASGI /metrics endpoint."""

from collections.abc import Callable

import pytest

from dockerstats_exporter.adapters.frameworks.asgi import create_exporter_app
from dockerstats_exporter.adapters.storage.in_memory import InMemoryMetricsStore
from dockerstats_exporter.core.models import MetricKind
from dockerstats_exporter.runtime.sampler import Sampler

pytestmark = [pytest.mark.asgi, pytest.mark.tier(2)]


@pytest.fixture
def store_with_data() -> InMemoryMetricsStore:
    """Fixture providing a store with readings for one container."""
    store = InMemoryMetricsStore()
    store.write(MetricKind.CPU_PERCENT, "web", 1.5)
    store.write(MetricKind.MEM_USAGE_BYTES, "web", 10285482)
    return store


class TestASGIMetricsEndpoint:
    """Tests for the /metrics endpoint."""

    async def test_metrics_endpoint_returns_200(
        self, store: InMemoryMetricsStore, asgi_test_client
    ) -> None:
        """Test that /metrics returns HTTP 200."""
        app = create_exporter_app(store)

        async with asgi_test_client(app) as client:
            response = await client.get("/metrics")

        assert response.status_code == 200

    async def test_metrics_endpoint_has_prometheus_content_type(
        self, store: InMemoryMetricsStore, asgi_test_client
    ) -> None:
        """Test that /metrics returns the exposition Content-Type."""
        app = create_exporter_app(store)

        async with asgi_test_client(app) as client:
            response = await client.get("/metrics")

        expected_content_type = "text/plain; version=0.0.4; charset=utf-8"
        assert response.headers["content-type"] == expected_content_type

    async def test_metrics_endpoint_returns_readings(
        self, store_with_data: InMemoryMetricsStore, asgi_test_client
    ) -> None:
        """Test that /metrics renders every stored reading."""
        app = create_exporter_app(store_with_data)

        async with asgi_test_client(app) as client:
            response = await client.get("/metrics")

        assert 'docker_cpu_percentage{container_name="web"} 1.5' in response.text
        assert (
            'docker_memory_usage_bytes{container_name="web"} 10285482.0'
            in response.text
        )

    async def test_metrics_empty_store_returns_empty_body(
        self, store: InMemoryMetricsStore, asgi_test_client
    ) -> None:
        """Test that /metrics returns empty body when the store is empty."""
        app = create_exporter_app(store)

        async with asgi_test_client(app) as client:
            response = await client.get("/metrics")

        assert response.status_code == 200
        assert response.text == ""

    async def test_metrics_reflect_latest_write(
        self, store_with_data: InMemoryMetricsStore, asgi_test_client
    ) -> None:
        """Each request renders the store as it is at that moment."""
        app = create_exporter_app(store_with_data)

        async with asgi_test_client(app) as client:
            await client.get("/metrics")
            store_with_data.write(MetricKind.CPU_PERCENT, "web", 7.25)
            response = await client.get("/metrics")

        lines = [
            line
            for line in response.text.splitlines()
            if line.startswith("docker_cpu_percentage{")
        ]
        assert lines == ['docker_cpu_percentage{container_name="web"} 7.25']

    async def test_head_returns_headers_only(
        self, store_with_data: InMemoryMetricsStore, asgi_test_client
    ) -> None:
        """HEAD /metrics answers 200 without a body."""
        app = create_exporter_app(store_with_data)

        async with asgi_test_client(app) as client:
            response = await client.head("/metrics")

        assert response.status_code == 200
        assert response.content == b""

    async def test_post_not_allowed(
        self, store: InMemoryMetricsStore, asgi_test_client
    ) -> None:
        """Only GET and HEAD are served."""
        app = create_exporter_app(store)

        async with asgi_test_client(app) as client:
            response = await client.post("/metrics")

        assert response.status_code == 405
        assert response.headers["allow"] == "GET, HEAD"

    async def test_unknown_path_returns_404(
        self, store: InMemoryMetricsStore, asgi_test_client
    ) -> None:
        """Paths other than /metrics are not found."""
        app = create_exporter_app(store)

        async with asgi_test_client(app) as client:
            response = await client.get("/logs")

        assert response.status_code == 404


class TestASGIErrorHandling:
    """Tests for error handling in the endpoint."""

    async def test_encoding_error_returns_500(
        self,
        store_with_data: InMemoryMetricsStore,
        asgi_test_client,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that /metrics handles encoding errors gracefully with 500."""
        import dockerstats_exporter.adapters.frameworks.asgi as asgi_module

        def failing_encode(*_args, **_kwargs):
            raise ValueError("Encoding failed")

        monkeypatch.setattr(asgi_module, "encode_readings", failing_encode)
        app = create_exporter_app(store_with_data)

        async with asgi_test_client(app) as client:
            response = await client.get("/metrics")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error"}


class TestSampledMetricsEndpoint:
    """End-to-end: sampler output served over HTTP."""

    async def test_sampled_batch_is_served(
        self,
        store: InMemoryMetricsStore,
        fake_source,
        stats_line: Callable[..., str],
        asgi_test_client,
    ) -> None:
        """A sampled docker stats line shows up as eight series."""
        source = fake_source([stats_line(Name="c1"), "", "garbage"])
        await Sampler(source, store, interval=1).run_once()
        app = create_exporter_app(store)

        async with asgi_test_client(app) as client:
            response = await client.get("/metrics")

        samples = [
            line for line in response.text.splitlines() if not line.startswith("#")
        ]
        assert samples == [
            'docker_block_io_in_bytes{container_name="c1"} 13500000.0',
            'docker_block_io_out_bytes{container_name="c1"} 0.0',
            'docker_cpu_percentage{container_name="c1"} 1.5',
            'docker_memory_percentage{container_name="c1"} 0.02',
            'docker_memory_usage_bytes{container_name="c1"} 10285482.0',
            'docker_memory_allowed_bytes{container_name="c1"} 34359738368.0',
            'docker_net_io_in_bytes{container_name="c1"} 0.0',
            'docker_net_io_out_bytes{container_name="c1"} 0.0',
        ]
