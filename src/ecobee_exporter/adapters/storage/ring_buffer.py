"""Ring buffer storage adapter for captured logs.

Provides bounded in-memory storage that automatically evicts oldest
entries when the buffer is full, keeping the exporter's memory use flat
no matter how long the thermostat API keeps failing.
"""

from collections import deque
from collections.abc import AsyncIterable

from ecobee_exporter.core.models import LogEntry


class RingBufferLogStorage:
    """Ring buffer implementation of LogStoragePort.

    Stores log entries in a fixed-size circular buffer. When the buffer
    is full, the oldest entry is automatically evicted to make room for
    new entries.

    Args:
        max_size: Maximum number of entries to store.
    """

    def __init__(self, max_size: int) -> None:
        self._buffer: deque[LogEntry] = deque(maxlen=max_size)

    async def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        self._buffer.append(entry)

    async def read(
        self, since: float = 0, level: str | None = None
    ) -> AsyncIterable[LogEntry]:
        """Read log entries since the given timestamp.

        Returns entries with timestamp > since, ordered by timestamp ascending.
        """
        filtered = [
            e
            for e in list(self._buffer)
            if e.timestamp > since and (level is None or e.level == level)
        ]
        for entry in sorted(filtered, key=lambda e: e.timestamp):
            yield entry
