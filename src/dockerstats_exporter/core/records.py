"""Decoding of `docker stats --format "{{json .}}"` lines.

Parsing happens in two stages. `parse` decodes one line into a RawSample
and validates its structure; `normalize` converts every field into a
number, collecting per-field failures instead of raising them.
"""

import json
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from dockerstats_exporter.core.errors import MalformedRecordError, UnitConversionError
from dockerstats_exporter.core.models import (
    FieldConversionError,
    MetricKind,
    MetricSample,
    RawSample,
)
from dockerstats_exporter.core.units import UnitSystem, convert, parse_percent

PAIR_SEPARATOR = " / "

# JSON keys of the record fields that are required, in addition to Name.
_TEXT_FIELDS = ("BlockIO", "CPUPerc", "MemPerc", "MemUsage", "NetIO")


def iter_lines(batch: Iterable[str]) -> Iterator[str]:
    """Yield the non-blank lines of a batch, stripped."""
    for line in batch:
        stripped = line.strip()
        if stripped:
            yield stripped


def split_pair(field_name: str, text: str) -> tuple[str, str]:
    """Split a composite field such as "13.5MB / 0B" into its two halves.

    Raises:
        MalformedRecordError: If the text does not contain exactly one
            " / " separator.
    """
    parts = text.split(PAIR_SEPARATOR)
    if len(parts) != 2:
        raise MalformedRecordError(
            f"{field_name} must hold two values separated by {PAIR_SEPARATOR!r}, "
            f"got {text!r}"
        )
    return parts[0], parts[1]


def _decode_object(line: str) -> dict[str, Any]:
    try:
        record = json.loads(line)
    except json.JSONDecodeError as e:
        raise MalformedRecordError(f"invalid JSON: {e.msg}", line) from e
    except RecursionError as e:
        raise MalformedRecordError("JSON nested too deeply", line) from e
    if not isinstance(record, dict):
        raise MalformedRecordError("record is not a JSON object", line)
    return record


def parse(line: str) -> RawSample:
    """Decode one stats line into a RawSample.

    Args:
        line: A single JSON object as printed by `docker stats`.

    Returns:
        RawSample with composite fields split into pairs.

    Raises:
        MalformedRecordError: If the line is not a JSON object, lacks a
            non-empty Name or one of the text fields, or a composite field
            does not split into exactly two values.
    """
    record = _decode_object(line)

    name = record.get("Name")
    if not isinstance(name, str) or not name.strip():
        raise MalformedRecordError("missing or empty Name", line)

    for key in _TEXT_FIELDS:
        if not isinstance(record.get(key), str):
            raise MalformedRecordError(f"missing or non-string {key}", line)

    try:
        return RawSample(
            name=name,
            block_io=split_pair("BlockIO", record["BlockIO"]),
            cpu_perc=record["CPUPerc"],
            mem_perc=record["MemPerc"],
            mem_usage=split_pair("MemUsage", record["MemUsage"]),
            net_io=split_pair("NetIO", record["NetIO"]),
        )
    except MalformedRecordError as e:
        raise MalformedRecordError(e.reason, line) from None


def normalize(raw: RawSample) -> MetricSample:
    """Convert every field of a RawSample into a number.

    Block and network I/O use decimal units, memory usage uses binary
    units, and the two percentages are parsed as plain numbers. A field
    that fails to convert is left as None and reported in `errors`.
    """
    errors: list[FieldConversionError] = []

    def _convert(
        kind: MetricKind, token: str, func: Callable[[str], Any]
    ) -> Any:
        try:
            return func(token)
        except UnitConversionError as e:
            errors.append(
                FieldConversionError(
                    container_name=raw.name,
                    kind=kind,
                    token=e.token,
                    reason=e.reason,
                )
            )
            return None

    def _decimal(token: str) -> int:
        return convert(token, UnitSystem.DECIMAL)

    def _binary(token: str) -> int:
        return convert(token, UnitSystem.BINARY)

    block_in, block_out = raw.block_io
    mem_used, mem_limit = raw.mem_usage
    net_in, net_out = raw.net_io

    return MetricSample(
        name=raw.name,
        block_io_in=_convert(MetricKind.BLOCK_IO_IN_BYTES, block_in, _decimal),
        block_io_out=_convert(MetricKind.BLOCK_IO_OUT_BYTES, block_out, _decimal),
        cpu_percent=_convert(MetricKind.CPU_PERCENT, raw.cpu_perc, parse_percent),
        mem_percent=_convert(MetricKind.MEM_PERCENT, raw.mem_perc, parse_percent),
        mem_usage_bytes=_convert(MetricKind.MEM_USAGE_BYTES, mem_used, _binary),
        mem_limit_bytes=_convert(MetricKind.MEM_LIMIT_BYTES, mem_limit, _binary),
        net_io_in=_convert(MetricKind.NET_IO_IN_BYTES, net_in, _decimal),
        net_io_out=_convert(MetricKind.NET_IO_OUT_BYTES, net_out, _decimal),
        errors=tuple(errors),
    )
