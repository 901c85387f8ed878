"""
Process source factory.

Creates the process source selected in the configuration.
"""

import logging
import os
from typing import Optional

from ..system.commands import is_command_available
from .base import ProcessSource

logger = logging.getLogger(__name__)

SOURCE_CHOICES = ["auto", "ps", "tasklist", "psutil"]


def resolve_source_name(source_name: str) -> str:
    """
    Map "auto" to the command-based source native to this OS.

    Falls back to psutil when the native command is not installed, as in
    minimal containers without procps.
    """
    if source_name != "auto":
        return source_name
    native = "tasklist" if os.name == "nt" else "ps"
    if is_command_available(native):
        return native
    logger.warning(f"'{native}' not found in PATH, falling back to psutil")
    return "psutil"


def create_process_source(
    source_name: str, source_logger: Optional[logging.Logger] = None
) -> ProcessSource:
    """
    Create a process source instance.

    Args:
        source_name: One of SOURCE_CHOICES.
        source_logger: Logger passed on to the source.

    Returns:
        The process source instance.

    Raises:
        ValueError: If the source name is unknown.
    """
    resolved = resolve_source_name(source_name)
    logger.info(f"Using process source '{resolved}' (configured: '{source_name}')")

    if resolved == "ps":
        from .posix_ps import PosixPsSource

        return PosixPsSource(logger=source_logger)
    elif resolved == "tasklist":
        from .windows_tasklist import WindowsTasklistSource

        return WindowsTasklistSource(logger=source_logger)
    elif resolved == "psutil":
        from .psutil_source import PsutilSource

        return PsutilSource(logger=source_logger)
    else:
        raise ValueError(f"Unknown process source: {source_name}")
