"""Logging configuration and structured logging helpers."""

from blogsearch.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
