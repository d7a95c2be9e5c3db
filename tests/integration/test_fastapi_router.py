"""Integration tests for the FastAPI exporter router."""

import json

import pytest
from fastapi import FastAPI

from ecobee_exporter.adapters.frameworks.fastapi import create_exporter_router
from ecobee_exporter.core.encoding import ndjson, prometheus
from ecobee_exporter.core.models import LogEntry
from tests.helpers import make_thermostat


@pytest.fixture
def app(registry, log_storage):
    """FastAPI app with the exporter router mounted."""
    application = FastAPI()
    application.include_router(create_exporter_router(registry, log_storage))
    return application


@pytest.mark.tier(2)
@pytest.mark.asgi
class TestFastAPIRouter:
    """Tests for create_exporter_router()."""

    async def test_metrics_endpoint(self, app, source, asgi_test_client) -> None:
        """/metrics serves the Prometheus text format."""
        source.thermostats = [make_thermostat("t1", "Home", connected=False)]

        async with asgi_test_client(app) as client:
            response = await client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"] == prometheus.CONTENT_TYPE
        assert "ecobee_fetch_time" in response.text

    async def test_logs_endpoint(self, app, log_storage, asgi_test_client) -> None:
        """/logs serves NDJSON and honors filters."""
        await log_storage.write(LogEntry(timestamp=1.0, level="INFO", message="a"))
        await log_storage.write(LogEntry(timestamp=2.0, level="ERROR", message="b"))

        async with asgi_test_client(app) as client:
            response = await client.get("/logs", params={"level": "error"})

        assert response.status_code == 200
        assert response.headers["content-type"] == ndjson.CONTENT_TYPE
        lines = response.text.splitlines()
        assert [json.loads(line)["message"] for line in lines] == ["b"]

    async def test_logs_invalid_since(self, app, log_storage, asgi_test_client):
        """An invalid since value returns all entries."""
        await log_storage.write(LogEntry(timestamp=1.0, level="INFO", message="a"))

        async with asgi_test_client(app) as client:
            response = await client.get("/logs", params={"since": "-1"})

        assert len(response.text.splitlines()) == 1
