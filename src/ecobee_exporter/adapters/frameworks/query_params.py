"""Shared query parameter parsing utilities for framework adapters.

This module provides utilities for parsing and validating the query
parameters accepted by the /logs endpoint of the ASGI and FastAPI adapters.
"""

import math

# Valid log levels for validation
VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_since(raw: str | None) -> float:
    """Parse and validate a 'since' timestamp.

    Args:
        raw: Raw query value, or None when absent.

    Returns:
        Timestamp as float, defaulting to 0.0 if invalid or missing.
        Rejects negative, NaN, and infinite values, returning 0.0 for these cases.
    """
    if raw is None:
        return 0.0
    try:
        value = float(raw)
    except ValueError:
        return 0.0
    if value < 0 or not math.isfinite(value):
        return 0.0
    return value


def parse_level(raw: str | None) -> str | None:
    """Parse and validate a 'level' filter.

    Args:
        raw: Raw query value, or None when absent.

    Returns:
        Validated level string (uppercase) or None if invalid/missing.
    """
    if raw and raw.upper() in VALID_LEVELS:
        return raw.upper()
    return None


def _first(params: dict[str, list[str]], name: str) -> str | None:
    values = params.get(name)
    return values[0] if values else None


def _parse_since_param(params: dict[str, list[str]]) -> float:
    """Parse 'since' from query string parameters (as returned by parse_qs)."""
    return parse_since(_first(params, "since"))


def _parse_level_param(params: dict[str, list[str]]) -> str | None:
    """Parse 'level' from query string parameters (as returned by parse_qs)."""
    return parse_level(_first(params, "level"))
