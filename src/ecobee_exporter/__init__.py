"""Prometheus exporter for ecobee thermostats.

Example:
    ```python
    from ecobee_exporter import EcobeeCollector, create_asgi_app, create_registry

    registry = create_registry(EcobeeCollector(client, prefix="ecobee"))
    app = create_asgi_app(registry)
    ```
"""

from ecobee_exporter.adapters.frameworks.asgi import create_asgi_app
from ecobee_exporter.adapters.logging import ExporterLogHandler, configure_logging
from ecobee_exporter.adapters.storage import InMemoryLogStorage, RingBufferLogStorage
from ecobee_exporter.core.collector import EcobeeCollector
from ecobee_exporter.core.descriptors import EcobeeDescriptors
from ecobee_exporter.core.encoding import encode_logs, encode_registry
from ecobee_exporter.core.metrics import bool_to_float, gauge
from ecobee_exporter.core.models import (
    LabelMismatchError,
    LogEntry,
    MetricDescriptor,
    MetricSample,
)
from ecobee_exporter.core.ports import (
    CollectorPort,
    LogStoragePort,
    ThermostatSourcePort,
)
from ecobee_exporter.core.registry import (
    PrometheusCollector,
    create_registry,
    register,
)

__all__ = [
    "CollectorPort",
    "EcobeeCollector",
    "EcobeeDescriptors",
    "ExporterLogHandler",
    "InMemoryLogStorage",
    "LabelMismatchError",
    "LogEntry",
    "LogStoragePort",
    "MetricDescriptor",
    "MetricSample",
    "PrometheusCollector",
    "RingBufferLogStorage",
    "ThermostatSourcePort",
    "bool_to_float",
    "configure_logging",
    "create_asgi_app",
    "create_registry",
    "encode_logs",
    "encode_registry",
    "gauge",
    "register",
]
