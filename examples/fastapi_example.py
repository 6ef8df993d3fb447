"""Example FastAPI application embedding the docker stats exporter.

Run with:
    uvicorn examples.fastapi_example:app --reload

Endpoints:
    /metrics   - Prometheus text format (latest value per container)
    /          - number of series currently held

The sampler is started and stopped by the application's lifespan, so the
metrics endpoint serves data as long as the app is running.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from dockerstats_exporter.adapters.frameworks.fastapi import create_metrics_router
from dockerstats_exporter.adapters.sources.docker_cli import DockerStatsSource
from dockerstats_exporter.adapters.storage.in_memory import InMemoryMetricsStore
from dockerstats_exporter.runtime.sampler import Sampler

store = InMemoryMetricsStore()
sampler = Sampler(DockerStatsSource(), store, interval=5)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    sampler.start()
    yield
    await sampler.stop()


app = FastAPI(title="Docker Stats Example", lifespan=lifespan)
app.include_router(create_metrics_router(store))


@app.get("/")
async def root() -> dict[str, int]:
    """Report how many series the exporter currently holds."""
    return {"series": len(store)}
