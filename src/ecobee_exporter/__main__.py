"""Command-line entry point: ``python -m ecobee_exporter``."""

import logging
import sys
from collections.abc import Sequence

import uvicorn

from ecobee_exporter.adapters.ecobee import EcobeeClient, TokenStore
from ecobee_exporter.adapters.frameworks.asgi import ASGIApp, create_asgi_app
from ecobee_exporter.adapters.logging import configure_logging
from ecobee_exporter.adapters.storage import RingBufferLogStorage
from ecobee_exporter.config import ConfigError, ExporterConfig, parse_args
from ecobee_exporter.core.collector import EcobeeCollector
from ecobee_exporter.core.registry import create_registry

logger = logging.getLogger("ecobee_exporter")


def build_app(config: ExporterConfig) -> ASGIApp:
    """Wire the client, collector, registry and log capture into an ASGI app."""
    log_storage = RingBufferLogStorage(max_size=config.log_buffer_size)
    configure_logging(config.log_level, log_storage)

    tokens = TokenStore(
        config.token_cache,
        api_key=config.api_key,
        refresh_token=config.refresh_token,
        base_url=config.api_base_url,
    )
    client = EcobeeClient(
        tokens, base_url=config.api_base_url, timeout=config.request_timeout
    )
    registry = create_registry(EcobeeCollector(client, prefix=config.metric_prefix))
    return create_asgi_app(registry, log_storage)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        config = parse_args(argv)
    except ConfigError as e:
        print(f"ecobee-exporter: {e}", file=sys.stderr)
        return 2

    app = build_app(config)
    logger.info("listening on %s:%d", config.host, config.port)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
