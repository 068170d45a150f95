"""Infrastructure layer - snapshot host and output formatters."""

from .formatters import JsonFormatter, TextFormatter
from .memory_host import (
    HostCanvas,
    HostContent,
    HostPlacement,
    InMemoryHost,
    MemoryTransaction,
)

__all__ = [
    "HostCanvas",
    "HostContent",
    "HostPlacement",
    "InMemoryHost",
    "JsonFormatter",
    "MemoryTransaction",
    "TextFormatter",
]
