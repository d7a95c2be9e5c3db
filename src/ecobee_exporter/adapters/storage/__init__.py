"""Storage adapters implementing core ports."""

from ecobee_exporter.adapters.storage.in_memory import InMemoryLogStorage
from ecobee_exporter.adapters.storage.ring_buffer import RingBufferLogStorage

__all__ = [
    "InMemoryLogStorage",
    "RingBufferLogStorage",
]
