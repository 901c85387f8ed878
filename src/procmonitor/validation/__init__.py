"""
Validation and error handling for the procmonitor package.

This module provides the exception hierarchy, configuration value checks and
helpers for consistent error reporting across the application.
"""

from .exceptions import (
    CommandSourceError,
    ErrorSeverity,
    HeaderParseError,
    ProcessMonitorError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_file_error,
    handle_subprocess_error,
)
from .validators import (
    validate_boolean,
    validate_enum_choice,
    validate_non_empty_string,
    validate_pid_list,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
)

__all__ = [
    # Exceptions
    "CommandSourceError",
    "ErrorSeverity",
    "HeaderParseError",
    "ProcessMonitorError",
    "ValidationError",
    # Error handling
    "handle_error",
    "handle_config_error",
    "handle_file_error",
    "handle_subprocess_error",
    "handle_cli_error",
    # Validators
    "validate_boolean",
    "validate_enum_choice",
    "validate_non_empty_string",
    "validate_pid_list",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_string_list",
]
