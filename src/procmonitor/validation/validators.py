"""
Simplified validation functions.

This module provides the value checks used when turning raw TOML data into
configuration objects.
"""

import math
from typing import Any, List, Optional

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is an integer within bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    # int() would accept True and truncate 5.9 to 5
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a float within bounds.

    Raises:
        ValidationError: If validation fails
    """
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if not math.isfinite(float_value):
        raise ValidationError(
            f"{field_name} must be a finite number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_enum_choice(
    value: Any,
    valid_choices: List[str],
    field_name: str = "choice"
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Raises:
        ValidationError: If the value is not in valid_choices
    """
    if value not in valid_choices:
        raise ValidationError(
            f"{field_name} must be one of {valid_choices}, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_boolean(value: Any, field_name: str = "flag") -> bool:
    """Validate that a value is a real boolean."""
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a boolean",
            field_name=field_name,
            value=value
        )
    return value


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """Validate that a value is a string with non-whitespace content."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value


def validate_string_list(value: Any, field_name: str = "values") -> List[str]:
    """
    Validate a list of non-empty strings.

    Args:
        value: List to validate
        field_name: Name of the field being validated

    Returns:
        The list with surrounding whitespace stripped from each entry

    Raises:
        ValidationError: If value is not a list or holds a non-string entry
    """
    if not isinstance(value, list):
        raise ValidationError(
            f"{field_name} must be a list",
            field_name=field_name,
            value=value
        )
    result = []
    for i, item in enumerate(value):
        result.append(validate_non_empty_string(item, field_name=f"{field_name}[{i}]").strip())
    return result


def validate_pid_list(value: Any, field_name: str = "pids") -> List[int]:
    """
    Validate a list of process IDs.

    Raises:
        ValidationError: If value is not a list of non-negative integers
    """
    if not isinstance(value, list):
        raise ValidationError(
            f"{field_name} must be a list",
            field_name=field_name,
            value=value
        )
    return [
        validate_positive_integer(pid, min_value=0, field_name=f"{field_name}[{i}]")
        for i, pid in enumerate(value)
    ]
