"""Structured logging for the copy entry store."""

from copydesk import config
from copydesk.logging.structured import (
    configure_structlog,
    get_logger,
    bind_context,
    clear_context,
)

# Can be reconfigured by calling configure_structlog() in api.main
configure_structlog(json_format=config.LOG_JSON, log_level=config.LOG_LEVEL)

__all__ = [
    "configure_structlog",
    "get_logger",
    "bind_context",
    "clear_context",
]
