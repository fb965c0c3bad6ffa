# ABOUTME: Cross-cutting helpers for logging, retries and console output
# ABOUTME: Shared by the wiki layer, the extraction layer and the CLI

from .logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
