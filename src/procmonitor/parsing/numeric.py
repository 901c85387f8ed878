"""
Numeric coercion of text tokens.

Metrics are summed over many processes and compared from one cycle to the
next, so values are kept as exact `Decimal`s rather than floats. A token that
cannot be read yields None, never zero and never an exception, so one bad
field does not abort a whole snapshot.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

logger = logging.getLogger(__name__)

BYTES_CONVERSION_FACTOR = Decimal(1024)


def to_decimal(value: Optional[str], logger: Optional[logging.Logger] = None) -> Optional[Decimal]:
    """
    Convert a text token to an exact Decimal.

    Args:
        value: The token, possibly padded with whitespace.
        logger: Logger for coercion failures, defaults to the module logger.

    Returns:
        The Decimal value, or None when the token is blank or not a finite number.

    Examples:
        >>> to_decimal("  12.50 ")
        Decimal('12.50')
        >>> to_decimal("") is None
        True
    """
    effective_logger = logger or globals()["logger"]
    if value is None:
        return None
    token = value.strip()
    if not token:
        return None
    # Decimal() accepts digit-group underscores such as "1_000"
    if "_" in token:
        effective_logger.warning(f"Cannot convert the value '{value}' to a decimal")
        return None
    try:
        result = Decimal(token)
    except InvalidOperation:
        effective_logger.warning(f"Cannot convert the value '{value}' to a decimal")
        return None
    if not result.is_finite():
        effective_logger.warning(f"Ignoring non-finite numeric value '{value}'")
        return None
    return result


def kib_to_bytes(value: Optional[Decimal]) -> Optional[Decimal]:
    """Convert a KiB amount to bytes, passing None through."""
    if value is None:
        return None
    return value * BYTES_CONVERSION_FACTOR
