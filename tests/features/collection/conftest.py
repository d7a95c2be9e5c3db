"""BDD step definitions for scrape.feature."""

import logging
from dataclasses import dataclass, field, replace

import pytest
from pytest_bdd import given, parsers, then, when

from ecobee_exporter.core.collector import EcobeeCollector
from ecobee_exporter.core.models import MetricSample
from ecobee_exporter.core.thermostats import EquipmentStatus, ThermostatSummary
from tests.helpers import FakeThermostatSource, make_sensor, make_thermostat


@dataclass
class ScrapeScenarioContext:
    """State shared between the steps of one scenario."""

    prefix: str = "ecobee"
    source: FakeThermostatSource = field(default_factory=FakeThermostatSource)
    samples: list[MetricSample] = field(default_factory=list)

    def named(self, suffix: str) -> list[MetricSample]:
        return [s for s in self.samples if s.name == suffix]

    def add_sensor(self, identifier: str, sensor_id: str, kind: str, value: str):
        thermostats = self.source.thermostats
        for i, thermostat in enumerate(thermostats):
            if thermostat.identifier == identifier:
                sensor = make_sensor(sensor_id, capabilities={kind: value})
                thermostats[i] = replace(
                    thermostat,
                    remote_sensors=(*thermostat.remote_sensors, sensor),
                )
                return
        raise AssertionError(f"no thermostat {identifier!r} in scenario")


@pytest.fixture
def ctx() -> ScrapeScenarioContext:
    """Fresh scenario context for each test."""
    return ScrapeScenarioContext()


# === Given ===


@given(parsers.parse('an exporter with metric prefix "{prefix}"'))
def given_exporter(ctx: ScrapeScenarioContext, prefix: str) -> None:
    ctx.prefix = prefix


@given("the thermostat API is unreachable")
def given_thermostat_api_down(ctx: ScrapeScenarioContext) -> None:
    ctx.source.thermostats_error = ConnectionError("api.ecobee.com unreachable")


@given("the summary API is unreachable")
def given_summary_api_down(ctx: ScrapeScenarioContext) -> None:
    ctx.source.summary_error = ConnectionError("api.ecobee.com unreachable")


@given(
    parsers.parse(
        'a {state} thermostat "{identifier}" named "{name}" '
        "at {tenths:d} tenths of a degree"
    )
)
def given_thermostat(
    ctx: ScrapeScenarioContext, state: str, identifier: str, name: str, tenths: int
) -> None:
    ctx.source.thermostats.append(
        make_thermostat(
            identifier, name, connected=state == "connected", actual=tenths
        )
    )


@given(parsers.parse('the summary reports "{relay}" running on "{identifier}"'))
def given_running_relay(
    ctx: ScrapeScenarioContext, relay: str, identifier: str
) -> None:
    summaries = dict(ctx.source.summaries)
    summaries[identifier] = ThermostatSummary(
        identifier=identifier,
        equipment_status=EquipmentStatus.from_tokens([relay]),
    )
    ctx.source.summaries = summaries


@given(
    parsers.parse(
        'thermostat "{identifier}" has a sensor "{sensor_id}" '
        'with {kind} "{value}"'
    )
)
def given_sensor(
    ctx: ScrapeScenarioContext, identifier: str, sensor_id: str, kind: str, value: str
) -> None:
    ctx.add_sensor(identifier, sensor_id, kind, value)


# === When ===


@when("Prometheus scrapes the exporter")
def when_scraped(ctx: ScrapeScenarioContext) -> None:
    collector = EcobeeCollector(ctx.source, prefix=ctx.prefix)
    ctx.samples = list(collector.collect())


# === Then ===


@then(parsers.parse('only "{name}" is exported'))
def then_only(ctx: ScrapeScenarioContext, name: str) -> None:
    assert [s.name for s in ctx.samples] == [name]


@then(parsers.parse('"{name}" is not exported'))
def then_not_exported(ctx: ScrapeScenarioContext, name: str) -> None:
    assert ctx.named(name) == []


@then(parsers.parse('an error mentioning "{text}" is logged'))
def then_error_logged(caplog: pytest.LogCaptureFixture, text: str) -> None:
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert any(text in message for message in errors), errors


@then(parsers.parse('"{name}" for thermostat "{identifier}" is {value:g}'))
def then_thermostat_value(
    ctx: ScrapeScenarioContext, name: str, identifier: str, value: float
) -> None:
    values = [
        s.value for s in ctx.named(name) if s.labels["thermostat_id"] == identifier
    ]
    assert values == [pytest.approx(value)]


@then(parsers.parse('"{name}" for sensor "{sensor_id}" is {value:g}'))
def then_sensor_value(
    ctx: ScrapeScenarioContext, name: str, sensor_id: str, value: float
) -> None:
    values = [s.value for s in ctx.named(name) if s.labels["sensor_id"] == sensor_id]
    assert values == [pytest.approx(value)]


@then(parsers.parse('{count:d} "{name}" samples are exported'))
def then_sample_count(ctx: ScrapeScenarioContext, count: int, name: str) -> None:
    assert len(ctx.named(name)) == count


@then(parsers.parse('equipment "{relay}" on "{identifier}" is {value:g}'))
def then_equipment(
    ctx: ScrapeScenarioContext, relay: str, identifier: str, value: float
) -> None:
    values = [
        s.value
        for s in ctx.named(f"{ctx.prefix}_equipment_running")
        if s.labels["thermostat_id"] == identifier and s.labels["equipment"] == relay
    ]
    assert values == [value]


@then(parsers.parse('the occupancy of sensor "{sensor_id}" is {exported}'))
def then_occupancy(ctx: ScrapeScenarioContext, sensor_id: str, exported: str) -> None:
    values = [
        s.value
        for s in ctx.named(f"{ctx.prefix}_occupancy")
        if s.labels["sensor_id"] == sensor_id
    ]
    if exported == "absent":
        assert values == []
    else:
        assert values == [float(exported)]
