"""Adapters connecting the core to the ecobee API, HTTP servers and logging."""
