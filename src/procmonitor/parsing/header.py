"""
Header line parsing for column-oriented command output.

Tools such as `ps` and `tasklist` print a header line naming their columns.
Column order depends on platform and flags, so sources locate the columns
they need by name instead of hard-coding positions.
"""

import csv
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..validation import HeaderParseError

logger = logging.getLogger(__name__)


@dataclass
class HeaderInfo:
    """
    Column positions resolved from a header line.

    Attributes:
        columns: Requested column name to zero-based index.
        fields: All header fields in order.
    """

    columns: Dict[str, int] = field(default_factory=dict)
    fields: List[str] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.fields)

    def index_of(self, name: str) -> int:
        return self.columns[name]


def split_header(header_line: str, delimiter: Optional[str] = None) -> List[str]:
    """
    Split a header line into its fields.

    Whitespace-separated when no delimiter is given, otherwise the line is
    read as one CSV record so quoted fields may contain spaces.
    """
    if delimiter is None:
        return header_line.split()
    rows = list(csv.reader([header_line], delimiter=delimiter, skipinitialspace=True))
    return [f.strip() for f in rows[0]] if rows else []


def _find_column(fields: List[str], name: str) -> Optional[int]:
    # exact, then case-insensitive, then prefix
    if name in fields:
        return fields.index(name)
    lowered = name.lower()
    for i, f in enumerate(fields):
        if f.lower() == lowered:
            return i
    for i, f in enumerate(fields):
        if f.lower().startswith(lowered):
            return i
    return None


def process_header_line(
    header_line: str, *header_names: str, delimiter: Optional[str] = None
) -> HeaderInfo:
    """
    Resolve the column index of every requested name in a header line.

    Args:
        header_line: The header line as printed by the command.
        *header_names: Column names to locate.
        delimiter: Field delimiter, None for whitespace.

    Returns:
        HeaderInfo with one entry per requested name.

    Raises:
        HeaderParseError: If the line is blank or any requested column is missing.

    Examples:
        >>> process_header_line("  PID %CPU %MEM   RSS COMMAND", "PID", "COMMAND").columns
        {'PID': 0, 'COMMAND': 4}
    """
    if header_line is None or not header_line.strip():
        raise HeaderParseError("Empty header line", header_line=header_line or "")

    fields = split_header(header_line, delimiter)
    info = HeaderInfo(fields=fields)
    missing = []
    for name in header_names:
        index = _find_column(fields, name)
        if index is None:
            missing.append(name)
        else:
            info.columns[name] = index

    if missing:
        raise HeaderParseError(
            f"Columns {missing} not found in header line: '{header_line.strip()}'",
            header_line=header_line,
            missing=missing,
        )

    logger.debug(f"Resolved header columns: {info.columns}")
    return info
