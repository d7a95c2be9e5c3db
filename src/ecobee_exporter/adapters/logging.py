"""Python logging handler adapter for the exporter.

This adapter bridges Python's standard library logging module to the
LogStoragePort, so collection errors can be inspected at the /logs
endpoint as well as in the process output.
"""

import asyncio
import logging
import sys
import traceback

from ecobee_exporter.core.models import LogEntry
from ecobee_exporter.core.ports import LogStoragePort

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


# Default attributes to extract from LogRecord
_DEFAULT_INCLUDE_ATTRS = ["module", "funcName", "lineno", "pathname"]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ExporterLogHandler(logging.Handler):
    """Logging handler that writes log records to a LogStoragePort.

    Records are written synchronously when no event loop is running in the
    emitting thread (e.g. during a scrape in a worker thread), and scheduled
    on the loop otherwise.

    Example:
        ```python
        storage = RingBufferLogStorage(max_size=1000)
        logging.getLogger().addHandler(ExporterLogHandler(storage))
        ```
    """

    def __init__(
        self,
        storage: LogStoragePort,
        include_attrs: list[str] | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler with a log storage backend.

        Args:
            storage: Storage adapter implementing LogStoragePort.
            include_attrs: List of LogRecord attributes to include. Defaults to
                ["module", "funcName", "lineno", "pathname"].
            level: Minimum level handled.
        """
        super().__init__(level)
        self._storage = storage
        self._include_attrs = include_attrs or _DEFAULT_INCLUDE_ATTRS
        self._pending: set[asyncio.Task[None]] = set()

    def to_entry(self, record: logging.LogRecord) -> LogEntry:
        """Convert a LogRecord into a LogEntry."""
        # Map of attribute names to their values from LogRecord
        attr_mapping: dict[str, str | int | float | bool] = {
            "module": record.name,
            "funcName": record.funcName or "",
            "lineno": record.lineno,
            "pathname": record.pathname,
        }

        attributes: dict[str, str | int | float | bool] = {
            key: attr_mapping[key] for key in self._include_attrs if key in attr_mapping
        }

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                value, (str, int, float, bool)
            ):
                attributes[key] = value

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                attributes["exc_type"] = exc_type.__name__
            if exc_value is not None:
                attributes["exc_message"] = str(exc_value)
            if exc_tb is not None:
                attributes["exc_traceback"] = "".join(
                    traceback.format_exception(exc_type, exc_value, exc_tb)
                )

        return LogEntry(
            timestamp=record.created,
            level=record.levelname,
            message=record.getMessage(),
            attributes=attributes,
        )

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record to the storage backend.

        Args:
            record: The log record to emit.
        """
        try:
            entry = self.to_entry(record)
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                asyncio.run(self._storage.write(entry))
                return
            task = loop.create_task(self._storage.write(entry))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        except Exception:
            self.handleError(record)


def configure_logging(
    level: str | int = logging.INFO,
    storage: LogStoragePort | None = None,
) -> ExporterLogHandler | None:
    """Configure root logging for the exporter process.

    Installs a stderr stream handler and, if a storage is given, an
    ExporterLogHandler writing to it.

    Args:
        level: Root log level name or number.
        storage: Optional storage receiving every record at or above level.

    Returns:
        The installed ExporterLogHandler, or None without storage.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(level)
    if storage is None:
        return None
    handler = ExporterLogHandler(storage)
    logging.getLogger().addHandler(handler)
    return handler
