"""Observability: structured logging for configuration resolution."""
