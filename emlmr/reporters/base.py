"""
Base reporter interface
"""

import abc
import sys
from typing import List, Mapping, Optional, Sequence

from ..core.exceptions import OutputError


class BaseReporter(abc.ABC):
    """Base class for all report renderers."""

    format_type = "report"

    @abc.abstractmethod
    def generate_report(self, columns: Sequence[str], rows: Sequence[Mapping[str, str]]) -> str:
        """
        Render rows as text.

        Args:
            columns: Ordered column names
            rows: One mapping per message; missing fields render empty

        Returns:
            Rendered report
        """
        pass

    @staticmethod
    def row_values(columns: Sequence[str], row: Mapping[str, str]) -> List[str]:
        return [row.get(column, '') for column in columns]

    def write_report(self, columns: Sequence[str], rows: Sequence[Mapping[str, str]],
                     output_file: Optional[str] = None) -> None:
        """
        Write the report to a file, or to stdout if no file is given.

        Raises:
            OutputError: If the output file cannot be created or written
        """
        output = self.generate_report(columns, rows)

        if output_file:
            try:
                with open(output_file, 'w', encoding='utf-8', newline='') as f:
                    f.write(output)
            except OSError as e:
                raise OutputError(output_file, self.format_type, e)
        elif output:
            sys.stdout.write(output)
            if not output.endswith('\n'):
                sys.stdout.write('\n')
