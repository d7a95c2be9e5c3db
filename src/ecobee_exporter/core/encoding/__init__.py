"""Wire encoders for scraped metrics and captured logs."""

from ecobee_exporter.core.encoding.ndjson import encode_logs
from ecobee_exporter.core.encoding.prometheus import encode_registry

__all__ = ["encode_logs", "encode_registry"]
