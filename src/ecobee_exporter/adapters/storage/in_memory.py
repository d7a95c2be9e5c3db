"""In-memory storage adapter for captured logs."""

from collections.abc import AsyncIterable

from ecobee_exporter.core.models import LogEntry


class InMemoryLogStorage:
    """In-memory implementation of LogStoragePort.

    Stores log entries in an unbounded list. Suitable for testing; use
    RingBufferLogStorage for long-running exporters.
    """

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []

    async def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        self._entries.append(entry)

    async def read(
        self, since: float = 0, level: str | None = None
    ) -> AsyncIterable[LogEntry]:
        """Read log entries since the given timestamp.

        Returns entries with timestamp > since, ordered by timestamp ascending.
        """
        filtered = [
            e
            for e in self._entries
            if e.timestamp > since and (level is None or e.level == level)
        ]
        for entry in sorted(filtered, key=lambda e: e.timestamp):
            yield entry
