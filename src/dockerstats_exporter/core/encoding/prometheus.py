"""Prometheus text exposition encoder for metric readings."""

from collections.abc import Iterable

from dockerstats_exporter.core.models import MetricKind, MetricReading

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

CONTAINER_LABEL = "container_name"


def _escape_label_value(value: str) -> str:
    """Escape a label value per the exposition format."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _format_value(value: float) -> str:
    if value == float("inf"):
        return "+Inf"
    if value == float("-inf"):
        return "-Inf"
    if value != value:
        return "NaN"
    return repr(float(value))


def encode_readings(readings: Iterable[MetricReading]) -> str:
    """Encode readings to Prometheus text format.

    Readings are grouped by metric kind. Each group gets a HELP and a TYPE
    header followed by one line per container.

    Args:
        readings: Readings as returned by a store snapshot.

    Returns:
        Exposition text ending in a newline, or an empty string if there
        are no readings.
    """
    grouped: dict[MetricKind, list[MetricReading]] = {}
    for reading in readings:
        grouped.setdefault(reading.kind, []).append(reading)

    lines: list[str] = []
    for kind in MetricKind:
        group = grouped.get(kind)
        if not group:
            continue
        lines.append(f"# HELP {kind.metric_name} {kind.help_text}")
        lines.append(f"# TYPE {kind.metric_name} gauge")
        for reading in group:
            label = _escape_label_value(reading.container_name)
            lines.append(
                f'{kind.metric_name}{{{CONTAINER_LABEL}="{label}"}} '
                f"{_format_value(reading.value)}"
            )

    if not lines:
        return ""

    return "\n".join(lines) + "\n"
