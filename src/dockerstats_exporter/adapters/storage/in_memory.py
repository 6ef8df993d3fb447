"""In-memory storage adapter for the latest metric readings."""

import threading

from dockerstats_exporter.core.models import MetricKind, MetricReading

_KIND_ORDER = {kind: index for index, kind in enumerate(MetricKind)}


class InMemoryMetricsStore:
    """In-memory implementation of MetricsSinkPort and MetricsSnapshotPort.

    Keeps only the last value written for each (kind, container name).
    Entries are created on first write and never removed, so a container
    that stops reporting keeps its last value. All access goes through a
    lock, which makes the store safe to write from the sampler while
    HTTP requests read it.
    """

    def __init__(self) -> None:
        self._values: dict[tuple[MetricKind, str], float] = {}
        self._lock = threading.Lock()

    def write(self, kind: MetricKind, container_name: str, value: float) -> None:
        """Replace the reading for (kind, container_name)."""
        with self._lock:
            self._values[(kind, container_name)] = float(value)

    def snapshot(self) -> list[MetricReading]:
        """Return a copy of all readings ordered by kind, then container name."""
        with self._lock:
            items = list(self._values.items())
        items.sort(key=lambda item: (_KIND_ORDER[item[0][0]], item[0][1]))
        return [
            MetricReading(kind=kind, container_name=name, value=value)
            for (kind, name), value in items
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
