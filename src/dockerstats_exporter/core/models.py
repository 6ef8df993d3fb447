"""Core domain models for container stats samples."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class MetricKind(Enum):
    """The fixed catalog of exported metrics.

    Each member carries its exposition name and help text. Declaration
    order is the order metrics are rendered in.
    """

    BLOCK_IO_IN_BYTES = (
        "docker_block_io_in_bytes",
        "Bytes read by the container from block devices",
    )
    BLOCK_IO_OUT_BYTES = (
        "docker_block_io_out_bytes",
        "Bytes written by the container to block devices",
    )
    CPU_PERCENT = (
        "docker_cpu_percentage",
        "Container CPU usage in percent of host CPU",
    )
    MEM_PERCENT = (
        "docker_memory_percentage",
        "Container memory usage in percent of its limit",
    )
    MEM_USAGE_BYTES = (
        "docker_memory_usage_bytes",
        "Container memory usage in bytes",
    )
    MEM_LIMIT_BYTES = (
        "docker_memory_allowed_bytes",
        "Container memory limit in bytes",
    )
    NET_IO_IN_BYTES = (
        "docker_net_io_in_bytes",
        "Bytes received by the container over the network",
    )
    NET_IO_OUT_BYTES = (
        "docker_net_io_out_bytes",
        "Bytes sent by the container over the network",
    )

    def __init__(self, metric_name: str, help_text: str) -> None:
        self.metric_name = metric_name
        self.help_text = help_text


@dataclass(frozen=True)
class RawSample:
    """One decoded `docker stats` line, before unit conversion.

    Composite fields are already split into their two halves.

    Attributes:
        name: Container name, the identity of the sample.
        block_io: (read, written) size tokens, decimal units.
        cpu_perc: CPU percentage text, e.g. "1.50%".
        mem_perc: Memory percentage text, e.g. "0.02%".
        mem_usage: (used, limit) size tokens, binary units.
        net_io: (received, sent) size tokens, decimal units.
    """

    name: str
    block_io: tuple[str, str]
    cpu_perc: str
    mem_perc: str
    mem_usage: tuple[str, str]
    net_io: tuple[str, str]


@dataclass(frozen=True)
class FieldConversionError:
    """A single field of a sample that could not be converted."""

    container_name: str
    kind: MetricKind
    token: str
    reason: str


@dataclass(frozen=True)
class MetricSample:
    """A fully converted sample ready to be written to the store.

    A field is None when its token failed to convert; the failure is
    recorded in `errors`.
    """

    name: str
    block_io_in: int | None = None
    block_io_out: int | None = None
    cpu_percent: float | None = None
    mem_percent: float | None = None
    mem_usage_bytes: int | None = None
    mem_limit_bytes: int | None = None
    net_io_in: int | None = None
    net_io_out: int | None = None
    errors: tuple[FieldConversionError, ...] = field(default=())

    def readings(self) -> Iterator[tuple[MetricKind, float]]:
        """Yield (kind, value) for every field that converted successfully."""
        values = (
            (MetricKind.BLOCK_IO_IN_BYTES, self.block_io_in),
            (MetricKind.BLOCK_IO_OUT_BYTES, self.block_io_out),
            (MetricKind.CPU_PERCENT, self.cpu_percent),
            (MetricKind.MEM_PERCENT, self.mem_percent),
            (MetricKind.MEM_USAGE_BYTES, self.mem_usage_bytes),
            (MetricKind.MEM_LIMIT_BYTES, self.mem_limit_bytes),
            (MetricKind.NET_IO_IN_BYTES, self.net_io_in),
            (MetricKind.NET_IO_OUT_BYTES, self.net_io_out),
        )
        for kind, value in values:
            if value is not None:
                yield kind, float(value)


@dataclass(frozen=True)
class MetricReading:
    """The latest stored value for one (kind, container) pair."""

    kind: MetricKind
    container_name: str
    value: float
