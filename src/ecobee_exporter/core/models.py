"""Core domain models for exported metrics and captured logs."""

from dataclasses import dataclass, field


class LabelMismatchError(ValueError):
    """Raised when a sample's label values do not fit its descriptor.

    This signals a programming error in the code emitting samples, never
    bad data from the thermostat API, so it is not caught by collectors.
    """


@dataclass(frozen=True)
class MetricDescriptor:
    """Metadata identifying one metric family.

    Attributes:
        name: Fully qualified metric name (e.g., ecobee_actual_temperature).
        help: Human-readable description rendered as the HELP line.
        label_names: Ordered label names every sample must provide.
        kind: Prometheus metric type. Only gauges are exported.
    """

    name: str
    help: str
    label_names: tuple[str, ...] = ()
    kind: str = "gauge"


@dataclass(frozen=True)
class MetricSample:
    """A single value for a metric family.

    Attributes:
        descriptor: The family this sample belongs to.
        value: The measured value.
        label_values: Values for the descriptor's labels, in the same order.
    """

    descriptor: MetricDescriptor
    value: float
    label_values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        expected = len(self.descriptor.label_names)
        if len(self.label_values) != expected:
            raise LabelMismatchError(
                f"{self.descriptor.name}: expected {expected} label values "
                f"{self.descriptor.label_names!r}, got {self.label_values!r}"
            )

    @property
    def name(self) -> str:
        """Metric name of the owning descriptor."""
        return self.descriptor.name

    @property
    def labels(self) -> dict[str, str]:
        """Label names mapped to their values."""
        return dict(zip(self.descriptor.label_names, self.label_values))


@dataclass(frozen=True)
class LogEntry:
    """A structured log entry.

    Attributes:
        timestamp: Unix timestamp in seconds.
        level: Log level (e.g., INFO, ERROR, DEBUG).
        message: The log message.
        attributes: Additional structured fields.
    """

    timestamp: float
    level: str
    message: str
    attributes: dict[str, str | int | float | bool] = field(default_factory=dict)
