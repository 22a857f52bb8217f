"""Observability module: structured logging setup."""

from static_search.observability.logging import JsonFormatter, configure_logging


__all__ = ["JsonFormatter", "configure_logging"]
