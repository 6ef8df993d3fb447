"""ASGI adapter serving the metrics catalog.

This adapter provides a framework-agnostic ASGI application that can be
run by any ASGI server (uvicorn, hypercorn, daphne) without requiring
FastAPI. When given a sampler it also drives the sampler's lifecycle
from the ASGI lifespan protocol.
"""

import json
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

from dockerstats_exporter.core.encoding.prometheus import CONTENT_TYPE, encode_readings
from dockerstats_exporter.core.ports import MetricsSnapshotPort
from dockerstats_exporter.runtime.sampler import Sampler

logger = logging.getLogger(__name__)

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]

METRICS_PATH = "/metrics"
_READ_METHODS = frozenset({"GET", "HEAD"})


async def _send_response(
    send: Send,
    status: int,
    content_type: str,
    body: str,
    include_body: bool = True,
    extra_headers: list[tuple[bytes, bytes]] | None = None,
) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body as string (will be encoded to bytes).
        include_body: False for HEAD requests; headers are sent unchanged.
        extra_headers: Additional raw headers to send.
    """
    payload = body.encode()
    headers = [
        (b"content-type", content_type.encode()),
        (b"content-length", str(len(payload)).encode()),
        *(extra_headers or []),
    ]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": payload if include_body else b""})


async def _handle_endpoint(
    send: Send,
    endpoint_func: Callable[[], Awaitable[str]],
    content_type: str,
    log_message: str,
    include_body: bool = True,
) -> None:
    """Execute an endpoint function with error handling and send response.

    Args:
        send: ASGI send callable for writing response.
        endpoint_func: Async function that returns response body.
        content_type: Content-Type header for success response.
        log_message: Message to log on error.
        include_body: False for HEAD requests.
    """
    try:
        body = await endpoint_func()
    except Exception:
        logger.exception(log_message)
        error_body = json.dumps({"error": "Internal Server Error"})
        await _send_response(send, 500, "application/json", error_body, include_body)
        return
    await _send_response(send, 200, content_type, body, include_body)


async def _handle_lifespan(
    receive: Receive, send: Send, sampler: Sampler | None
) -> None:
    """Run the ASGI lifespan protocol, starting and stopping the sampler.

    A sampler that fails to start or stop is reported to the server with
    the matching `*.failed` message instead of raising.
    """
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            try:
                if sampler is not None:
                    sampler.start()
            except Exception as e:
                logger.exception("Failed to start sampler")
                await send({"type": "lifespan.startup.failed", "message": str(e)})
                return
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            try:
                if sampler is not None:
                    await sampler.stop()
            except Exception as e:
                logger.exception("Failed to stop sampler")
                await send({"type": "lifespan.shutdown.failed", "message": str(e)})
                return
            await send({"type": "lifespan.shutdown.complete"})
            return


def create_exporter_app(
    store: MetricsSnapshotPort,
    sampler: Sampler | None = None,
) -> ASGIApp:
    """Create an ASGI app exposing the store at /metrics.

    Args:
        store: Store implementing MetricsSnapshotPort.
        sampler: Optional sampler started on lifespan startup and stopped
            on lifespan shutdown.

    Returns:
        ASGI application callable.
    """

    async def render() -> str:
        return encode_readings(store.snapshot())

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _handle_lifespan(receive, send, sampler)
            return
        if scope["type"] != "http":
            return

        path = scope["path"]
        method = scope.get("method", "GET")

        if path == METRICS_PATH:
            if method not in _READ_METHODS:
                await _send_response(
                    send,
                    405,
                    "text/plain",
                    "Method Not Allowed",
                    extra_headers=[(b"allow", b"GET, HEAD")],
                )
                return
            await _handle_endpoint(
                send,
                render,
                CONTENT_TYPE,
                "Error encoding metrics endpoint",
                include_body=method != "HEAD",
            )
        else:
            await _send_response(send, 404, "text/plain", "Not Found")

    return app
