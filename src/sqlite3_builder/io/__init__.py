"""I/O layer: database connectors."""
