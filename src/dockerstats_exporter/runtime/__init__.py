"""Long-running components of the exporter."""

from dockerstats_exporter.runtime.sampler import Sampler, TickReport, run_forever

__all__ = ["Sampler", "TickReport", "run_forever"]
