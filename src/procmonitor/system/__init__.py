"""
System interaction utilities: command execution and tool detection.
"""

from .commands import DEFAULT_COMMAND_TIMEOUT, is_command_available, run_command

__all__ = [
    "DEFAULT_COMMAND_TIMEOUT",
    "is_command_available",
    "run_command",
]
