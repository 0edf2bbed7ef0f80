"""
Console table reporter
"""

from typing import Mapping, Sequence

from tabulate import tabulate

from .base import BaseReporter


class TableReporter(BaseReporter):
    """Borderless, left-aligned text table with a single header row."""

    format_type = "table"

    def generate_report(self, columns: Sequence[str], rows: Sequence[Mapping[str, str]]) -> str:
        if not columns:
            return ""
        return tabulate(
            [self.row_values(columns, row) for row in rows],
            headers=list(columns),
            tablefmt="plain",
            stralign="left",
            disable_numparse=True,
            missingval="",
        )
