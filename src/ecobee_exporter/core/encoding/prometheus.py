"""Prometheus text format encoding of a collector registry."""

from prometheus_client import CollectorRegistry, generate_latest

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


def encode_registry(registry: CollectorRegistry) -> str:
    """Run one scrape of every registered collector and encode the result.

    This blocks for as long as the collectors' data sources do.

    Returns:
        Prometheus text exposition, HELP and TYPE lines before each family.
    """
    return generate_latest(registry).decode("utf-8")
