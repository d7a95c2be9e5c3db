"""Metric helper functions for creating MetricSample objects."""

from ecobee_exporter.core.models import MetricDescriptor, MetricSample


def gauge(
    descriptor: MetricDescriptor,
    value: float,
    *label_values: str,
) -> MetricSample:
    """Create a gauge metric sample.

    Args:
        descriptor: Metric family of the sample.
        value: Current gauge value.
        *label_values: Values for the descriptor's labels, in order.

    Returns:
        MetricSample for the descriptor.

    Raises:
        LabelMismatchError: If the number of label values does not match
            the descriptor's label names.
    """
    return MetricSample(
        descriptor=descriptor,
        value=float(value),
        label_values=tuple(label_values),
    )


def bool_to_float(value: bool) -> float:
    """Map a flag to the 0/1 gauge convention."""
    return 1.0 if value else 0.0
