"""Stats source adapters."""

from dockerstats_exporter.adapters.sources.docker_cli import DockerStatsSource

__all__ = ["DockerStatsSource"]
