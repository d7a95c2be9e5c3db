"""Bridge from exporter collectors to a ``prometheus_client`` registry.

``prometheus_client.CollectorRegistry`` owns registration, duplicate name
detection and scraping. ``PrometheusCollector`` adapts a ``CollectorPort``
to the custom collector interface the registry expects.
"""

from collections.abc import Iterator

from prometheus_client import CollectorRegistry
from prometheus_client.core import GaugeMetricFamily, Metric

from ecobee_exporter.core.models import MetricDescriptor
from ecobee_exporter.core.ports import CollectorPort


def _family(descriptor: MetricDescriptor) -> GaugeMetricFamily:
    return GaugeMetricFamily(
        descriptor.name, descriptor.help, labels=descriptor.label_names
    )


class PrometheusCollector:
    """Custom ``prometheus_client`` collector wrapping a ``CollectorPort``.

    Args:
        collector: Produces the samples of one scrape.
    """

    def __init__(self, collector: CollectorPort) -> None:
        self.collector = collector

    def describe(self) -> list[Metric]:
        """Return empty families so the registry can check metric names."""
        return [_family(d) for d in self.collector.describe()]

    def collect(self) -> Iterator[Metric]:
        """Run one scrape and yield a gauge family per metric with samples.

        Families come out in descriptor order, samples in emission order.
        """
        families = {d.name: _family(d) for d in self.collector.describe()}
        for sample in self.collector.collect():
            family = families.get(sample.name)
            if family is None:
                family = families[sample.name] = _family(sample.descriptor)
            family.add_metric(sample.label_values, sample.value)
        for family in families.values():
            if family.samples:
                yield family


def register(
    registry: CollectorRegistry, collector: CollectorPort
) -> PrometheusCollector:
    """Register a collector, returning the handle needed to unregister it.

    Raises:
        ValueError: If any of the collector's metric names is already
            registered.
    """
    bridge = PrometheusCollector(collector)
    registry.register(bridge)
    return bridge


def create_registry(*collectors: CollectorPort) -> CollectorRegistry:
    """Create a registry holding the given collectors and nothing else."""
    registry = CollectorRegistry(auto_describe=True)
    for collector in collectors:
        register(registry, collector)
    return registry
