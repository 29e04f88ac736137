"""
Utility helpers shared across PostKeep packages.
"""

from .logging import bind_session_id, configure_logging, current_session_id, get_logger, time_call
from .naming import camel_to_snake, snake_to_camel

__all__ = [
    "bind_session_id",
    "camel_to_snake",
    "configure_logging",
    "current_session_id",
    "get_logger",
    "snake_to_camel",
    "time_call",
]
