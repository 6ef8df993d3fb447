"""Process entry point: sample docker stats and serve them over HTTP.

Run with:
    python -m dockerstats_exporter

Configuration is read from the environment (PORT, HOST,
SAMPLE_INTERVAL_SECONDS, DOCKER_BIN, LOG_LEVEL).
"""

import logging

import uvicorn

from dockerstats_exporter.adapters.frameworks.asgi import ASGIApp, create_exporter_app
from dockerstats_exporter.adapters.logging import configure_logging
from dockerstats_exporter.adapters.sources.docker_cli import DockerStatsSource
from dockerstats_exporter.adapters.storage.in_memory import InMemoryMetricsStore
from dockerstats_exporter.config import ExporterConfig
from dockerstats_exporter.runtime.sampler import Sampler

logger = logging.getLogger(__name__)


def build_app(config: ExporterConfig) -> ASGIApp:
    """Wire store, source and sampler into an ASGI app."""
    store = InMemoryMetricsStore()
    source = DockerStatsSource(config.docker_bin)
    sampler = Sampler(source, store, interval=config.interval)
    return create_exporter_app(store, sampler)


def main() -> None:
    config = ExporterConfig.from_env()
    configure_logging(config.log_level)
    app = build_app(config)
    logger.info(
        "Listening on %s:%d",
        config.host,
        config.port,
        extra={"interval_seconds": config.interval},
    )
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_config=None,
        lifespan="on",
    )


if __name__ == "__main__":
    main()
