"""
Parsing helpers shared by the command-based process sources.
"""

from .header import HeaderInfo, process_header_line, split_header
from .numeric import BYTES_CONVERSION_FACTOR, kib_to_bytes, to_decimal

__all__ = [
    "BYTES_CONVERSION_FACTOR",
    "HeaderInfo",
    "kib_to_bytes",
    "process_header_line",
    "split_header",
    "to_decimal",
]
