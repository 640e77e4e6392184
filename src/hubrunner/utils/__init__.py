"""Shared utility functions.

This subpackage provides common utilities used across the
application with no dependencies on other subpackages.

Key modules:
    - logging: Logging configuration and URL credential masking
    - protocols: Protocol definitions for dependency injection
    - prompt: Callback-driven interactive confirmation
"""

from .logging import configure_logging, get_logger, sanitize_text
from .protocols import (
    EventHandler,
    BatchProtocol,
    HubClientProtocol,
    HubProtocol,
)
from .prompt import ConfirmFn, read_line

__all__ = [
    # logging
    "configure_logging",
    "get_logger",
    "sanitize_text",
    # protocols
    "EventHandler",
    "BatchProtocol",
    "HubClientProtocol",
    "HubProtocol",
    # prompt
    "ConfirmFn",
    "read_line",
]
