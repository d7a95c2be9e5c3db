"""FastAPI adapter for the exporter endpoints."""

from fastapi import APIRouter, Query, Response
from prometheus_client import CollectorRegistry

from ecobee_exporter.adapters.frameworks.asgi import scrape
from ecobee_exporter.adapters.frameworks.query_params import parse_level, parse_since
from ecobee_exporter.core.encoding import ndjson, prometheus
from ecobee_exporter.core.ports import LogStoragePort


def create_exporter_router(
    registry: CollectorRegistry,
    log_storage: LogStoragePort,
) -> APIRouter:
    """Create a FastAPI router with /metrics and /logs endpoints.

    Args:
        registry: Registry scraped on every /metrics request.
        log_storage: Storage adapter implementing LogStoragePort.

    Returns:
        APIRouter with /metrics and /logs endpoints configured.
    """
    router = APIRouter()

    @router.get("/metrics")
    async def get_metrics() -> Response:
        """Return freshly collected metrics in Prometheus text format."""
        body = await scrape(registry)
        return Response(content=body, media_type=prometheus.CONTENT_TYPE)

    @router.get("/logs")
    async def get_logs(
        since: str | None = Query(default=None),
        level: str | None = Query(default=None),
    ) -> Response:
        """Return captured logs in NDJSON format.

        Args:
            since: Unix timestamp. Returns entries with timestamp > since.
            level: Only return entries with this level.
        """
        entries = log_storage.read(since=parse_since(since), level=parse_level(level))
        body = await ndjson.encode_logs(entries)
        return Response(content=body, media_type=ndjson.CONTENT_TYPE)

    return router
