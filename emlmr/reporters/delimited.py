"""
Delimited text reporter
"""

from typing import Mapping, Sequence

from ..config.constants import DEFAULT_DELIMITER
from .base import BaseReporter


class DelimitedReporter(BaseReporter):
    """
    Header line followed by one line per row, fields joined by a delimiter.

    Values are written as-is: a value that contains the delimiter or a
    newline is not quoted or escaped.
    """

    format_type = "delimited"

    def __init__(self, delimiter: str = DEFAULT_DELIMITER):
        self.delimiter = delimiter

    def generate_report(self, columns: Sequence[str], rows: Sequence[Mapping[str, str]]) -> str:
        if not columns:
            return ""
        lines = [self.delimiter.join(columns)]
        for row in rows:
            lines.append(self.delimiter.join(self.row_values(columns, row)))
        return "\n".join(lines) + "\n"
