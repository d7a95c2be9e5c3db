"""Integration tests for the ASGI /logs endpoint."""

import json
import logging

import pytest

from ecobee_exporter.adapters.frameworks.asgi import create_asgi_app
from ecobee_exporter.adapters.logging import ExporterLogHandler
from ecobee_exporter.adapters.storage.in_memory import InMemoryLogStorage
from ecobee_exporter.core.encoding.ndjson import CONTENT_TYPE
from ecobee_exporter.core.models import LogEntry


@pytest.fixture
async def log_storage_with_data() -> InMemoryLogStorage:
    """Fixture providing a log storage with an INFO and an ERROR entry."""
    storage = InMemoryLogStorage()
    await storage.write(
        LogEntry(
            timestamp=1000.0,
            level="INFO",
            message="refreshing ecobee access token",
        )
    )
    await storage.write(
        LogEntry(
            timestamp=2000.0,
            level="ERROR",
            message="Failed to fetch thermostats",
            attributes={"exc_type": "ConnectError"},
        )
    )
    return storage


@pytest.mark.tier(2)
@pytest.mark.asgi
class TestASGILogsEndpoint:
    """Tests for the /logs endpoint."""

    async def test_logs_endpoint_returns_ndjson(
        self, registry, log_storage_with_data, asgi_test_client
    ) -> None:
        """/logs returns every entry as NDJSON."""
        app = create_asgi_app(registry, log_storage_with_data)

        async with asgi_test_client(app) as client:
            response = await client.get("/logs")

        assert response.status_code == 200
        assert response.headers["content-type"] == CONTENT_TYPE
        lines = [json.loads(line) for line in response.text.splitlines()]
        assert [entry["message"] for entry in lines] == [
            "refreshing ecobee access token",
            "Failed to fetch thermostats",
        ]
        assert lines[1]["attributes"] == {"exc_type": "ConnectError"}

    async def test_logs_filtered_by_since(
        self, registry, log_storage_with_data, asgi_test_client
    ) -> None:
        """?since= returns only newer entries."""
        app = create_asgi_app(registry, log_storage_with_data)

        async with asgi_test_client(app) as client:
            response = await client.get("/logs", params={"since": "1500"})

        lines = response.text.splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["timestamp"] == 2000.0

    async def test_logs_filtered_by_level(
        self, registry, log_storage_with_data, asgi_test_client
    ) -> None:
        """?level= is case-insensitive."""
        app = create_asgi_app(registry, log_storage_with_data)

        async with asgi_test_client(app) as client:
            response = await client.get("/logs", params={"level": "error"})

        lines = response.text.splitlines()
        assert [json.loads(line)["level"] for line in lines] == ["ERROR"]

    async def test_invalid_params_are_ignored(
        self, registry, log_storage_with_data, asgi_test_client
    ) -> None:
        """Malformed filters fall back to returning everything."""
        app = create_asgi_app(registry, log_storage_with_data)

        async with asgi_test_client(app) as client:
            response = await client.get(
                "/logs", params={"since": "yesterday", "level": "loud"}
            )

        assert response.status_code == 200
        assert len(response.text.splitlines()) == 2

    async def test_empty_storage_returns_empty_body(
        self, registry, log_storage, asgi_test_client
    ) -> None:
        """No entries produce an empty body."""
        app = create_asgi_app(registry, log_storage)

        async with asgi_test_client(app) as client:
            response = await client.get("/logs")

        assert response.status_code == 200
        assert response.text == ""

    async def test_logs_without_storage_returns_404(
        self, registry, asgi_test_client
    ) -> None:
        """Without log storage the endpoint does not exist."""
        app = create_asgi_app(registry)

        async with asgi_test_client(app) as client:
            response = await client.get("/logs")

        assert response.status_code == 404

    async def test_scrape_errors_appear_in_logs(
        self, source, registry, log_storage, asgi_test_client
    ) -> None:
        """Errors logged during a scrape can be read back from /logs."""
        source.thermostats_error = ConnectionError("unreachable")
        handler = ExporterLogHandler(log_storage)
        collector_logger = logging.getLogger("ecobee_exporter.core.collector")
        collector_logger.addHandler(handler)
        app = create_asgi_app(registry, log_storage)
        try:
            async with asgi_test_client(app) as client:
                await client.get("/metrics")
                response = await client.get("/logs", params={"level": "ERROR"})
        finally:
            collector_logger.removeHandler(handler)

        messages = [json.loads(line)["message"] for line in response.text.splitlines()]
        assert any("thermostat" in message.lower() for message in messages)
