"""Builders and fakes shared by the test suite."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from ecobee_exporter.core.models import MetricSample
from ecobee_exporter.core.thermostats import (
    Capability,
    EquipmentStatus,
    RemoteSensor,
    Runtime,
    Selection,
    Settings,
    Thermostat,
    ThermostatSummary,
)


def make_thermostat(
    identifier: str = "t1",
    name: str = "Home",
    connected: bool = True,
    actual: int = 700,
    desired_cool: int = 720,
    desired_heat: int = 680,
    fan_mode: str = "auto",
    hvac_mode: str = "heat",
    sensors: tuple[RemoteSensor, ...] = (),
) -> Thermostat:
    """Build a thermostat snapshot; temperatures are tenths of a degree."""
    return Thermostat(
        identifier=identifier,
        name=name,
        runtime=Runtime(
            connected=connected,
            actual_temperature=actual,
            desired_heat=desired_heat,
            desired_cool=desired_cool,
            desired_fan_mode=fan_mode,
        ),
        settings=Settings(hvac_mode=hvac_mode),
        remote_sensors=sensors,
    )


def make_sensor(
    sensor_id: str = "s1",
    name: str = "Bedroom",
    sensor_type: str = "ecobee3_remote_sensor",
    in_use: bool = True,
    capabilities: dict[str, str] | list[tuple[str, str]] | None = None,
) -> RemoteSensor:
    """Build a remote sensor from (type, value) capability pairs."""
    pairs = capabilities.items() if isinstance(capabilities, dict) else capabilities
    return RemoteSensor(
        id=sensor_id,
        name=name,
        type=sensor_type,
        in_use=in_use,
        capabilities=tuple(Capability(type=t, value=v) for t, v in pairs or ()),
    )


def make_summary(identifier: str = "t1", *running: str) -> dict[str, ThermostatSummary]:
    """Build a summary mapping with the given relay tokens running."""
    return {
        identifier: ThermostatSummary(
            identifier=identifier,
            equipment_status=EquipmentStatus.from_tokens(running),
        )
    }


@dataclass
class FakeThermostatSource:
    """Scriptable ThermostatSourcePort that records every call."""

    thermostats: list[Thermostat] = field(default_factory=list)
    summaries: Mapping[str, ThermostatSummary] = field(default_factory=dict)
    thermostats_error: Exception | None = None
    summary_error: Exception | None = None
    calls: list[tuple[str, Selection]] = field(default_factory=list)

    def get_thermostats(self, selection: Selection) -> list[Thermostat]:
        self.calls.append(("get_thermostats", selection))
        if self.thermostats_error is not None:
            raise self.thermostats_error
        return list(self.thermostats)

    def get_thermostat_summary(
        self, selection: Selection
    ) -> Mapping[str, ThermostatSummary]:
        self.calls.append(("get_thermostat_summary", selection))
        if self.summary_error is not None:
            raise self.summary_error
        return self.summaries


def samples_named(samples: list[MetricSample], name: str) -> list[MetricSample]:
    """Filter samples by full metric name."""
    return [s for s in samples if s.name == name]


def values_by_labels(
    samples: list[MetricSample], name: str
) -> dict[tuple[str, ...], float]:
    """Map label values to sample values for one metric name."""
    return {s.label_values: s.value for s in samples_named(samples, name)}
