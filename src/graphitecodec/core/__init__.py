"""Core domain: models, configuration and the Graphite codec."""
