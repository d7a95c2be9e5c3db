"""On-demand collector translating thermostat snapshots into gauges.

Each call to ``EcobeeCollector.collect()`` fetches a fresh snapshot and
flattens it into labeled samples. Bad data is logged and skipped per item;
only the fetches can end a scrape early. Nothing is cached between scrapes.
"""

import logging
import time
from collections.abc import Iterator, Mapping

from ecobee_exporter.core.descriptors import EcobeeDescriptors
from ecobee_exporter.core.metrics import bool_to_float, gauge
from ecobee_exporter.core.models import MetricDescriptor, MetricSample
from ecobee_exporter.core.ports import ThermostatSourcePort
from ecobee_exporter.core.thermostats import (
    Capability,
    EquipmentStatus,
    RemoteSensor,
    Selection,
    Thermostat,
    ThermostatSummary,
)

logger = logging.getLogger(__name__)

THERMOSTAT_SELECTION = Selection(
    include_sensors=True,
    include_runtime=True,
    include_settings=True,
)
SUMMARY_SELECTION = Selection(include_equipment_status=True)

_OCCUPANCY = {"true": 1.0, "false": 0.0}


class EcobeeCollector:
    """Collector gathering ecobee metrics on demand.

    Args:
        source: Thermostat data source. Shared by concurrent scrapes.
        prefix: Prefix for all metric names. Must be unique per registry.
    """

    def __init__(self, source: ThermostatSourcePort, prefix: str = "ecobee") -> None:
        self.source = source
        self.descriptors = EcobeeDescriptors(prefix)

    def describe(self) -> Iterator[MetricDescriptor]:
        """Yield all metric descriptors."""
        return self.descriptors.describe()

    def collect(self) -> Iterator[MetricSample]:
        """Fetch thermostat data and yield samples for one scrape.

        The fetch time sample is always yielded first. Fetch failures are
        logged and end the scrape; nothing is raised to the caller.
        """
        d = self.descriptors

        start = time.perf_counter()
        try:
            thermostats = self.source.get_thermostats(THERMOSTAT_SELECTION)
        except Exception as e:
            yield gauge(d.fetch_time, time.perf_counter() - start)
            logger.error("fetching thermostats failed: %s", e)
            return
        yield gauge(d.fetch_time, time.perf_counter() - start)

        summaries: Mapping[str, ThermostatSummary] | None = None
        for thermostat in thermostats:
            # the summary query covers every registered thermostat
            if summaries is None:
                try:
                    summaries = self.source.get_thermostat_summary(SUMMARY_SELECTION)
                except Exception as e:
                    logger.error("fetching thermostat summary failed: %s", e)
                    return

            if thermostat.runtime.connected:
                summary = summaries.get(thermostat.identifier)
                status = summary.equipment_status if summary else EquipmentStatus()
                yield from self._runtime_samples(thermostat, status)
            for sensor in thermostat.remote_sensors:
                yield from self._sensor_samples(thermostat, sensor)

    def _runtime_samples(
        self, thermostat: Thermostat, status: EquipmentStatus
    ) -> Iterator[MetricSample]:
        d = self.descriptors
        runtime = thermostat.runtime
        t_labels = (thermostat.identifier, thermostat.name)

        yield gauge(d.actual_temperature, runtime.actual_temperature / 10, *t_labels)
        yield gauge(d.target_temperature_max, runtime.desired_cool / 10, *t_labels)
        yield gauge(d.target_temperature_min, runtime.desired_heat / 10, *t_labels)
        yield gauge(d.current_hvac_mode, 0, *t_labels, thermostat.settings.hvac_mode)
        yield gauge(d.current_fan_mode, 0, *t_labels, runtime.desired_fan_mode)

        for relay, running in status.relays():
            yield gauge(d.equipment_running, bool_to_float(running), *t_labels, relay)

    def _sensor_samples(
        self, thermostat: Thermostat, sensor: RemoteSensor
    ) -> Iterator[MetricSample]:
        d = self.descriptors
        s_labels = (
            thermostat.identifier,
            thermostat.name,
            sensor.id,
            sensor.name,
            sensor.type,
        )

        yield gauge(d.in_use, bool_to_float(sensor.in_use), *s_labels)
        for capability in sensor.capabilities:
            sample = self._capability_sample(capability, s_labels)
            if sample is not None:
                yield sample

    def _capability_sample(
        self, capability: Capability, s_labels: tuple[str, ...]
    ) -> MetricSample | None:
        d = self.descriptors
        if capability.type == "temperature":
            value = _parse_float(capability)
            if value is None:
                return None
            return gauge(d.temperature, value / 10, *s_labels)
        if capability.type == "humidity":
            value = _parse_float(capability)
            if value is None:
                return None
            return gauge(d.humidity, value, *s_labels)
        if capability.type == "occupancy":
            if capability.value in _OCCUPANCY:
                return gauge(d.occupancy, _OCCUPANCY[capability.value], *s_labels)
            logger.error("unknown sensor occupancy value %r", capability.value)
            return None
        logger.info("ignoring sensor capability %r", capability.type)
        return None


def _parse_float(capability: Capability) -> float | None:
    """Parse a numeric capability value, logging values that are not numbers.

    Surrounding whitespace and digit separators are rejected.
    """
    value = capability.value
    try:
        if value != value.strip() or "_" in value:
            raise ValueError(f"invalid numeric value {value!r}")
        return float(value)
    except ValueError as e:
        logger.error("parsing sensor %s value failed: %s", capability.type, e)
        return None
