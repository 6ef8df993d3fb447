"""Background sampling loop feeding the metrics store.

Each tick reads one batch from the stats source, parses and converts every
line, and writes the results to the sink. Failures are handled per scope:

- the source failing abandons the tick; the next tick tries again
- any other error in a tick is logged; the loop keeps running
- a malformed line is skipped; the rest of the batch is processed
- a field that fails to convert is skipped; the stored value stays stale
"""

import asyncio
import logging
from dataclasses import dataclass

from dockerstats_exporter.core.errors import (
    MalformedRecordError,
    SourceUnavailableError,
)
from dockerstats_exporter.core.ports import MetricsSinkPort, StatsSourcePort
from dockerstats_exporter.core.records import iter_lines, normalize, parse

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 2.0


@dataclass
class TickReport:
    """Outcome of a single sampling pass."""

    lines: int = 0
    samples: int = 0
    skipped_lines: int = 0
    field_errors: int = 0
    source_failed: bool = False


class Sampler:
    """Periodically copies container stats from a source into a sink.

    Args:
        source: Callable returning the current batch of raw lines.
        sink: Store receiving one write per converted field.
        interval: Seconds to wait after a tick finishes before the next one.
    """

    def __init__(
        self,
        source: StatsSourcePort,
        sink: MetricsSinkPort,
        interval: float = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.source = source
        self.sink = sink
        self.interval = interval
        self._stop = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        """True while the background task is alive."""
        return self._task is not None and not self._task.done()

    def process_line(self, line: str, report: TickReport) -> None:
        """Parse, convert and store a single line, updating `report`."""
        try:
            sample = normalize(parse(line))
        except MalformedRecordError as e:
            report.skipped_lines += 1
            logger.warning(
                "Skipping malformed stats line: %s",
                e.reason,
                extra={"line": e.line or line},
            )
            return

        for error in sample.errors:
            report.field_errors += 1
            logger.warning(
                "Could not convert %s for container %s: %s",
                error.kind.metric_name,
                error.container_name,
                error.reason,
                extra={
                    "container_name": error.container_name,
                    "field": error.kind.metric_name,
                    "token": error.token,
                },
            )

        for kind, value in sample.readings():
            self.sink.write(kind, sample.name, value)
        report.samples += 1

    async def run_once(self) -> TickReport:
        """Run one sampling pass and report what happened."""
        report = TickReport()
        try:
            batch = await asyncio.to_thread(self.source)
        except SourceUnavailableError:
            report.source_failed = True
            logger.exception("Stats source unavailable, skipping this tick")
            return report

        for line in iter_lines(batch):
            report.lines += 1
            self.process_line(line, report)

        logger.debug(
            "Sampling pass complete",
            extra={
                "lines": report.lines,
                "samples": report.samples,
                "skipped_lines": report.skipped_lines,
                "field_errors": report.field_errors,
            },
        )
        return report

    async def run_forever(self, stop: asyncio.Event | None = None) -> None:
        """Tick until `stop` (or the sampler's own stop token) is set.

        The wait between ticks starts after a tick has finished, so a slow
        source call delays the next tick instead of overlapping it. A tick
        that raises is logged and does not end the loop.
        """
        stop = stop or self._stop
        logger.info(
            "Sampler started",
            extra={"interval_seconds": self.interval},
        )
        while not stop.is_set():
            try:
                await self.run_once()
            except Exception:
                logger.exception("Sampling pass failed, retrying next tick")
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue
        logger.info("Sampler stopped")

    def start(self) -> "asyncio.Task[None]":
        """Start the loop as a background task on the running event loop."""
        if self.running:
            raise RuntimeError("sampler is already running")
        self._stop.clear()
        self._task = asyncio.create_task(self.run_forever(), name="stats-sampler")
        return self._task

    async def stop(self) -> None:
        """Signal the loop to stop and wait for the current tick to finish."""
        self._stop.set()
        if self._task is not None:
            await self._task
            self._task = None


async def run_forever(
    interval: float,
    source: StatsSourcePort,
    sink: MetricsSinkPort,
    stop: asyncio.Event | None = None,
) -> None:
    """Sample `source` into `sink` every `interval` seconds until stopped."""
    await Sampler(source, sink, interval).run_forever(stop)
