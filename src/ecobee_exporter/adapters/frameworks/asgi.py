"""ASGI generic adapter for the exporter endpoints.

This adapter provides a framework-agnostic ASGI application that can be used
with any ASGI server (uvicorn, hypercorn, daphne) without requiring FastAPI
as a dependency.
"""

import asyncio
import json
import logging
from collections.abc import Callable, Coroutine
from typing import Any
from urllib.parse import parse_qs

from prometheus_client import CollectorRegistry

from ecobee_exporter.adapters.frameworks.query_params import (
    _parse_level_param,
    _parse_since_param,
)
from ecobee_exporter.core.encoding import ndjson, prometheus
from ecobee_exporter.core.ports import LogStoragePort

logger = logging.getLogger(__name__)

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]

LANDING_PAGE = """<html>
<head><title>Ecobee Exporter</title></head>
<body>
<h1>Ecobee Exporter</h1>
<p><a href="/metrics">Metrics</a></p>
<p><a href="/logs">Logs</a></p>
</body>
</html>
"""


def _parse_query_params(scope: Scope) -> dict[str, list[str]]:
    """Parse query string from ASGI scope into parameter dictionary.

    Args:
        scope: ASGI scope dictionary containing request metadata.

    Returns:
        Dictionary mapping parameter names to lists of values.
        Returns empty dict if query_string is missing or empty.
    """
    query_string = scope.get("query_string", b"").decode(errors="replace")
    return parse_qs(query_string)


async def _send_response(send: Send, status: int, content_type: str, body: str) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body as string (will be encoded to bytes).
    """
    headers = [(b"content-type", content_type.encode())]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body.encode()})


async def _handle_endpoint(
    send: Send,
    endpoint_func: Callable[[], Coroutine[Any, Any, str]],
    content_type: str,
    log_message: str,
) -> None:
    """Execute an endpoint function with error handling and send response.

    Args:
        send: ASGI send callable for writing response.
        endpoint_func: Async function that returns response body.
        content_type: Content-Type header for success response.
        log_message: Message to log on error.
    """
    try:
        body = await endpoint_func()
    except Exception:
        logger.exception(log_message)
        error_body = json.dumps({"error": "Internal Server Error"})
        await _send_response(send, 500, "application/json", error_body)
        return
    await _send_response(send, 200, content_type, body)


async def scrape(registry: CollectorRegistry) -> str:
    """Run one scrape in a worker thread and return the exposition text.

    Data source calls block, so each scrape gets its own thread and
    overlapping scrapes do not stall the event loop.
    """
    return await asyncio.to_thread(prometheus.encode_registry, registry)


def create_asgi_app(
    registry: CollectorRegistry,
    log_storage: LogStoragePort | None = None,
) -> ASGIApp:
    """Create an ASGI app with /metrics, /logs and / endpoints.

    Args:
        registry: Registry scraped on every /metrics request.
        log_storage: Storage adapter holding captured logs. Without it,
            /logs returns 404.

    Returns:
        ASGI application callable.
    """

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        path = scope["path"]

        if path == "/metrics":
            await _handle_endpoint(
                send,
                lambda: scrape(registry),
                prometheus.CONTENT_TYPE,
                "Error encoding metrics endpoint",
            )
        elif path == "/logs" and log_storage is not None:
            params = _parse_query_params(scope)
            since = _parse_since_param(params)
            level = _parse_level_param(params)
            await _handle_endpoint(
                send,
                lambda: ndjson.encode_logs(log_storage.read(since=since, level=level)),
                ndjson.CONTENT_TYPE,
                "Error encoding logs endpoint",
            )
        elif path == "/":
            await _send_response(send, 200, "text/html; charset=utf-8", LANDING_PAGE)
        else:
            await _send_response(send, 404, "text/plain", "Not Found")

    return app
