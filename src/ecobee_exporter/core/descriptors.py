"""Metric descriptors exported for ecobee thermostats."""

from collections.abc import Iterator

from ecobee_exporter.core.models import MetricDescriptor

# Labels shared by every per-thermostat metric
THERMOSTAT_LABELS = ("thermostat_id", "thermostat_name")
SENSOR_LABELS = (*THERMOSTAT_LABELS, "sensor_id", "sensor_name", "sensor_type")


class EcobeeDescriptors:
    """Builds the fixed catalog of metric descriptors under a prefix.

    Every metric name is ``<prefix>_<suffix>``. Metric names must be unique
    per process, so two instances with the same prefix cannot both be
    registered with one ``CollectorRegistry``.

    Args:
        prefix: Namespace for all metric names (e.g., "ecobee").

    Raises:
        ValueError: If prefix is empty.
    """

    def __init__(self, prefix: str) -> None:
        if not prefix:
            raise ValueError("metric prefix must not be empty")
        self.prefix = prefix

        # collector metrics
        self.fetch_time = self._new(
            "fetch_time",
            "elapsed time fetching data via Ecobee API",
            (),
        )

        # thermostat (aka runtime) metrics
        self.actual_temperature = self._new(
            "actual_temperature",
            "thermostat-averaged current temperature",
            THERMOSTAT_LABELS,
        )
        self.target_temperature_max = self._new(
            "target_temperature_max",
            "maximum temperature for thermostat to maintain",
            THERMOSTAT_LABELS,
        )
        self.target_temperature_min = self._new(
            "target_temperature_min",
            "minimum temperature for thermostat to maintain",
            THERMOSTAT_LABELS,
        )

        # sensor metrics
        self.temperature = self._new(
            "temperature",
            "temperature reported by a sensor in degrees",
            SENSOR_LABELS,
        )
        self.humidity = self._new(
            "humidity",
            "humidity reported by a sensor in percent",
            SENSOR_LABELS,
        )
        self.occupancy = self._new(
            "occupancy",
            "occupancy reported by a sensor (0 or 1)",
            SENSOR_LABELS,
        )
        self.in_use = self._new(
            "in_use",
            "is sensor being used in thermostat calculations (0 or 1)",
            SENSOR_LABELS,
        )

        # mode and equipment metrics carry their state in the last label
        self.current_hvac_mode = self._new(
            "currenthvacmode",
            "current hvac mode of thermostat",
            (*THERMOSTAT_LABELS, "current_hvac_mode"),
        )
        self.current_fan_mode = self._new(
            "currentfanmode",
            "current fan mode of thermostat",
            (*THERMOSTAT_LABELS, "current_fan_mode"),
        )
        self.equipment_running = self._new(
            "equipment_running",
            "current equipment status (0 or 1)",
            (*THERMOSTAT_LABELS, "equipment"),
        )

    def _new(
        self, suffix: str, help_text: str, label_names: tuple[str, ...]
    ) -> MetricDescriptor:
        return MetricDescriptor(
            name=f"{self.prefix}_{suffix}",
            help=help_text,
            label_names=label_names,
        )

    def describe(self) -> Iterator[MetricDescriptor]:
        """Yield all descriptors in a fixed order."""
        yield self.fetch_time
        yield self.actual_temperature
        yield self.target_temperature_max
        yield self.target_temperature_min
        yield self.temperature
        yield self.humidity
        yield self.occupancy
        yield self.in_use
        yield self.current_hvac_mode
        yield self.current_fan_mode
        yield self.equipment_running
