"""Port interfaces between the sampling core and its collaborators.

The sampler depends only on these protocols, not on the concrete store,
the docker CLI or the HTTP layer.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from dockerstats_exporter.core.models import MetricKind, MetricReading


@runtime_checkable
class MetricsSinkPort(Protocol):
    """Port for writing the latest value of a metric.

    Examples: InMemoryMetricsStore.
    """

    def write(self, kind: MetricKind, container_name: str, value: float) -> None:
        """Store `value` as the current reading for (kind, container_name)."""
        ...


@runtime_checkable
class MetricsSnapshotPort(Protocol):
    """Port for reading all current metric values."""

    def snapshot(self) -> Sequence[MetricReading]:
        """Return a point-in-time copy of all readings.

        Returns:
            Readings ordered by metric kind, then container name.
        """
        ...


@runtime_checkable
class StatsSourcePort(Protocol):
    """Port for obtaining one batch of raw stats lines.

    Implementations raise SourceUnavailableError when no batch can be
    produced. Examples: DockerStatsSource.
    """

    def __call__(self) -> Sequence[str]:
        """Return the current batch, one record per line."""
        ...
