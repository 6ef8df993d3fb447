"""Storage adapters implementing core ports."""

from dockerstats_exporter.adapters.storage.in_memory import InMemoryMetricsStore

__all__ = ["InMemoryMetricsStore"]
