"""Prometheus exporter for `docker stats` container resource usage."""

from dockerstats_exporter.adapters.frameworks.asgi import create_exporter_app
from dockerstats_exporter.adapters.sources.docker_cli import DockerStatsSource
from dockerstats_exporter.adapters.storage.in_memory import InMemoryMetricsStore
from dockerstats_exporter.config import ExporterConfig
from dockerstats_exporter.core.errors import (
    ConfigurationError,
    ExporterError,
    MalformedRecordError,
    SourceUnavailableError,
    UnitConversionError,
)
from dockerstats_exporter.core.models import (
    MetricKind,
    MetricReading,
    MetricSample,
    RawSample,
)
from dockerstats_exporter.core.records import normalize, parse
from dockerstats_exporter.core.units import UnitSystem, convert, parse_percent
from dockerstats_exporter.runtime.sampler import Sampler, run_forever

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DockerStatsSource",
    "ExporterConfig",
    "ExporterError",
    "InMemoryMetricsStore",
    "MalformedRecordError",
    "MetricKind",
    "MetricReading",
    "MetricSample",
    "RawSample",
    "Sampler",
    "SourceUnavailableError",
    "UnitConversionError",
    "UnitSystem",
    "convert",
    "create_exporter_app",
    "normalize",
    "parse",
    "parse_percent",
    "run_forever",
]
