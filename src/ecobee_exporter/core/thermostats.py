"""Thermostat snapshot models parsed from ecobee API payloads.

These types are rebuilt from the API response on every scrape and are
read-only to the collector. Field names follow Python conventions; the
``from_payload`` constructors map them from ecobee's camelCase JSON.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

SELECTION_REGISTERED = "registered"


@dataclass(frozen=True)
class Selection:
    """Filter record sent with thermostat queries.

    Attributes:
        selection_type: Which thermostats to match (e.g., "registered").
        selection_match: Match value for the selection type.
        include_runtime: Include the runtime block.
        include_sensors: Include remote sensors and their capabilities.
        include_settings: Include the settings block.
        include_equipment_status: Include running equipment (summary only).
    """

    selection_type: str = SELECTION_REGISTERED
    selection_match: str = ""
    include_runtime: bool = False
    include_sensors: bool = False
    include_settings: bool = False
    include_equipment_status: bool = False

    def to_payload(self) -> dict[str, Any]:
        """Render the ecobee JSON selection object."""
        payload: dict[str, Any] = {
            "selectionType": self.selection_type,
            "selectionMatch": self.selection_match,
        }
        flags = {
            "includeRuntime": self.include_runtime,
            "includeSensors": self.include_sensors,
            "includeSettings": self.include_settings,
            "includeEquipmentStatus": self.include_equipment_status,
        }
        payload.update({key: True for key, enabled in flags.items() if enabled})
        return payload


@dataclass(frozen=True)
class Runtime:
    """Runtime block of a thermostat. Temperatures are tenths of a degree."""

    connected: bool = False
    actual_temperature: int = 0
    desired_heat: int = 0
    desired_cool: int = 0
    desired_fan_mode: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Runtime":
        return cls(
            connected=bool(payload.get("connected", False)),
            actual_temperature=int(payload.get("actualTemperature") or 0),
            desired_heat=int(payload.get("desiredHeat") or 0),
            desired_cool=int(payload.get("desiredCool") or 0),
            desired_fan_mode=str(payload.get("desiredFanMode") or ""),
        )


@dataclass(frozen=True)
class Settings:
    """Settings block of a thermostat."""

    hvac_mode: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Settings":
        return cls(hvac_mode=str(payload.get("hvacMode") or ""))


@dataclass(frozen=True)
class Capability:
    """One reading reported by a remote sensor.

    The value is always a string on the wire, even for numeric readings.
    """

    type: str
    value: str
    id: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Capability":
        return cls(
            type=str(payload.get("type") or ""),
            value=str(payload.get("value") or ""),
            id=str(payload.get("id") or ""),
        )


@dataclass(frozen=True)
class RemoteSensor:
    """A sensor attached to a thermostat, including the built-in one."""

    id: str
    name: str
    type: str
    in_use: bool = False
    capabilities: tuple[Capability, ...] = ()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RemoteSensor":
        return cls(
            id=str(payload.get("id") or ""),
            name=str(payload.get("name") or ""),
            type=str(payload.get("type") or ""),
            in_use=bool(payload.get("inUse", False)),
            capabilities=tuple(
                Capability.from_payload(c) for c in payload.get("capability") or ()
            ),
        )


@dataclass(frozen=True)
class Thermostat:
    """Snapshot of one thermostat as returned by the thermostat query."""

    identifier: str
    name: str
    runtime: Runtime = field(default_factory=Runtime)
    settings: Settings = field(default_factory=Settings)
    remote_sensors: tuple[RemoteSensor, ...] = ()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Thermostat":
        return cls(
            identifier=str(payload.get("identifier") or ""),
            name=str(payload.get("name") or ""),
            runtime=Runtime.from_payload(payload.get("runtime") or {}),
            settings=Settings.from_payload(payload.get("settings") or {}),
            remote_sensors=tuple(
                RemoteSensor.from_payload(s)
                for s in payload.get("remoteSensors") or ()
            ),
        )


def _relay(token: str, name: str) -> Any:
    return field(default=False, metadata={"token": token, "name": name})


@dataclass(frozen=True)
class EquipmentStatus:
    """Running state of each equipment relay wired to a thermostat.

    Every field is a relay. Its field metadata holds the token the summary
    query reports and the name exported as the ``equipment`` label.
    """

    heat_pump: bool = _relay("heatPump", "HeatPump")
    heat_pump2: bool = _relay("heatPump2", "HeatPump2")
    heat_pump3: bool = _relay("heatPump3", "HeatPump3")
    comp_cool1: bool = _relay("compCool1", "CompCool1")
    comp_cool2: bool = _relay("compCool2", "CompCool2")
    aux_heat1: bool = _relay("auxHeat1", "AuxHeat1")
    aux_heat2: bool = _relay("auxHeat2", "AuxHeat2")
    aux_heat3: bool = _relay("auxHeat3", "AuxHeat3")
    fan: bool = _relay("fan", "Fan")
    humidifier: bool = _relay("humidifier", "Humidifier")
    dehumidifier: bool = _relay("dehumidifier", "Dehumidifier")
    ventilator: bool = _relay("ventilator", "Ventilator")
    economizer: bool = _relay("economizer", "Economizer")
    comp_hot_water: bool = _relay("compHotWater", "CompHotWater")
    aux_hot_water: bool = _relay("auxHotWater", "AuxHotWater")

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "EquipmentStatus":
        """Build a status with the given relay tokens running.

        Unknown tokens are ignored.
        """
        running = {token.strip() for token in tokens}
        return cls(**{attr: token in running for attr, token, _ in RELAY_FIELDS})

    @classmethod
    def from_csv(cls, value: str) -> "EquipmentStatus":
        """Parse the comma-separated form used by the summary query."""
        return cls.from_tokens(t for t in value.split(",") if t.strip())

    def relays(self) -> Iterator[tuple[str, bool]]:
        """Yield ``(name, running)`` for every relay, in declaration order."""
        for attr, _, name in RELAY_FIELDS:
            yield name, getattr(self, attr)


RELAY_FIELDS: tuple[tuple[str, str, str], ...] = tuple(
    (f.name, f.metadata["token"], f.metadata["name"]) for f in fields(EquipmentStatus)
)
RELAY_TOKENS: tuple[str, ...] = tuple(token for _, token, _ in RELAY_FIELDS)
RELAY_NAMES: tuple[str, ...] = tuple(name for _, _, name in RELAY_FIELDS)


@dataclass(frozen=True)
class ThermostatSummary:
    """Summary entry for one thermostat from the summary query."""

    identifier: str
    equipment_status: EquipmentStatus = field(default_factory=EquipmentStatus)

    @classmethod
    def from_status_entry(cls, entry: str) -> "ThermostatSummary":
        """Parse one ``statusList`` entry of the form ``"<id>:<csv>"``."""
        identifier, _, running = entry.partition(":")
        return cls(
            identifier=identifier,
            equipment_status=EquipmentStatus.from_csv(running),
        )


def parse_thermostat_list(payload: Mapping[str, Any]) -> list[Thermostat]:
    """Parse the ``thermostatList`` of a thermostat query response."""
    return [Thermostat.from_payload(t) for t in payload.get("thermostatList") or ()]


def parse_status_list(payload: Mapping[str, Any]) -> dict[str, ThermostatSummary]:
    """Parse the ``statusList`` of a summary response keyed by identifier."""
    summaries = (
        ThermostatSummary.from_status_entry(e) for e in payload.get("statusList") or ()
    )
    return {s.identifier: s for s in summaries}
