"""Example FastAPI application mounting the exporter endpoints.

Run with:
    ECOBEE_API_KEY=... ECOBEE_REFRESH_TOKEN=... \
        uvicorn examples.fastapi_example:app --port 9098

Endpoints:
    /metrics              - Prometheus text format, scraped live from ecobee
    /logs                 - NDJSON logs (all entries)
    /logs?since=<ts>      - NDJSON logs since timestamp
    /logs?level=<level>   - NDJSON logs filtered by level (INFO, ERROR, etc.)
    /thermostats          - Thermostat names and connectivity as JSON
"""

from fastapi import FastAPI

from ecobee_exporter.adapters.ecobee import EcobeeClient, TokenStore
from ecobee_exporter.adapters.frameworks.fastapi import create_exporter_router
from ecobee_exporter.adapters.logging import configure_logging
from ecobee_exporter.adapters.storage import RingBufferLogStorage
from ecobee_exporter.config import ExporterConfig
from ecobee_exporter.core.collector import THERMOSTAT_SELECTION, EcobeeCollector
from ecobee_exporter.core.registry import create_registry

config = ExporterConfig.from_env().validate()

log_storage = RingBufferLogStorage(max_size=config.log_buffer_size)
configure_logging(config.log_level, log_storage)

client = EcobeeClient(
    TokenStore(
        config.token_cache,
        api_key=config.api_key,
        refresh_token=config.refresh_token,
        base_url=config.api_base_url,
    ),
    base_url=config.api_base_url,
    timeout=config.request_timeout,
)
registry = create_registry(EcobeeCollector(client, prefix=config.metric_prefix))

app = FastAPI(title="ecobee exporter")
app.include_router(create_exporter_router(registry, log_storage))


@app.get("/thermostats")
def thermostats() -> list[dict[str, str | bool]]:
    """List the thermostats visible to the configured application key."""
    return [
        {
            "identifier": t.identifier,
            "name": t.name,
            "connected": t.runtime.connected,
        }
        for t in client.get_thermostats(THERMOSTAT_SELECTION)
    ]
