"""Core domain: models, ports, descriptors and the collection engine."""
