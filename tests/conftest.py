"""Shared test fixtures for all test modules."""

import httpx
import pytest
from prometheus_client import CollectorRegistry

from ecobee_exporter.core.collector import EcobeeCollector
from ecobee_exporter.core.registry import create_registry
from tests.helpers import FakeThermostatSource


@pytest.fixture
def source() -> FakeThermostatSource:
    """Provide an empty scriptable thermostat source."""
    return FakeThermostatSource()


@pytest.fixture
def collector(source: FakeThermostatSource) -> EcobeeCollector:
    """Provide a collector with the default prefix over the fake source."""
    return EcobeeCollector(source, prefix="ecobee")


@pytest.fixture
def registry(collector: EcobeeCollector) -> CollectorRegistry:
    """Provide a registry holding only the default collector."""
    return create_registry(collector)


# === ASGI Test Fixtures ===


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Returns a callable that accepts an ASGI app and yields a client
    with ASGITransport configured.

    Usage:
        async def test_something(asgi_test_client):
            app = create_asgi_app(registry, log_storage)
            async with asgi_test_client(app) as client:
                response = await client.get("/endpoint")
    """

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client


@pytest.fixture
def log_storage():
    """Fixture providing an empty log storage."""
    from ecobee_exporter.adapters.storage.in_memory import InMemoryLogStorage

    return InMemoryLogStorage()
