"""Framework adapters serving the metrics endpoint.

The FastAPI adapter is imported from its own module so FastAPI stays an
optional dependency.
"""

from dockerstats_exporter.adapters.frameworks.asgi import create_exporter_app

__all__ = ["create_exporter_app"]
