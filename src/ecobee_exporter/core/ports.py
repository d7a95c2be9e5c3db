"""Port interfaces for the exporter.

These protocols define the contracts that adapters must implement.
The core domain depends only on these interfaces, not concrete implementations.
"""

from collections.abc import AsyncIterable, Iterable, Mapping
from typing import Protocol, runtime_checkable

from ecobee_exporter.core.models import LogEntry, MetricDescriptor, MetricSample
from ecobee_exporter.core.thermostats import Selection, Thermostat, ThermostatSummary


@runtime_checkable
class ThermostatSourcePort(Protocol):
    """Port for fetching thermostat data.

    Implementations must be safe to call from concurrent scrapes.
    Examples: EcobeeClient.
    """

    def get_thermostats(self, selection: Selection) -> list[Thermostat]:
        """Fetch thermostats matching the selection.

        Raises:
            Exception: Any failure to fetch; callers treat all errors alike.
        """
        ...

    def get_thermostat_summary(
        self, selection: Selection
    ) -> Mapping[str, ThermostatSummary]:
        """Fetch summaries keyed by thermostat identifier."""
        ...


@runtime_checkable
class CollectorPort(Protocol):
    """Port for anything that produces metric samples on demand.

    Examples: EcobeeCollector.
    """

    def describe(self) -> Iterable[MetricDescriptor]:
        """Return every descriptor this collector may emit samples for."""
        ...

    def collect(self) -> Iterable[MetricSample]:
        """Produce a fresh set of samples for one scrape."""
        ...


@runtime_checkable
class LogStoragePort(Protocol):
    """Port for log storage operations.

    Adapters implementing this protocol can store and retrieve log entries.
    Examples: InMemoryLogStorage, RingBufferLogStorage.
    """

    async def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        ...

    def read(
        self, since: float = 0, level: str | None = None
    ) -> AsyncIterable[LogEntry]:
        """Read log entries since the given timestamp.

        Args:
            since: Unix timestamp. Returns entries with timestamp > since.
                   Default 0 returns all entries.
            level: Only return entries with this level, if given.

        Returns:
            Async iterable of LogEntry objects, ordered by timestamp ascending.
        """
        ...
