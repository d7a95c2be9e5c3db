"""HTTP framework adapters serving the exporter endpoints."""
