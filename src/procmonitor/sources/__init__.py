"""
Process sources: the platform-specific ways of listing running processes.
"""

from .base import CommandProcessSource, ProcessSource
from .factory import SOURCE_CHOICES, create_process_source, resolve_source_name
from .posix_ps import PosixPsSource
from .psutil_source import PsutilSource
from .windows_tasklist import WindowsTasklistSource, parse_mem_usage

__all__ = [
    "SOURCE_CHOICES",
    "CommandProcessSource",
    "PosixPsSource",
    "ProcessSource",
    "PsutilSource",
    "WindowsTasklistSource",
    "create_process_source",
    "parse_mem_usage",
    "resolve_source_name",
]
