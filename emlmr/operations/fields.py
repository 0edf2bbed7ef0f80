"""
List-fields operation: report the header names found, not their values
"""

import logging
import sys
from typing import Iterable, List, Optional

from ..core.exceptions import OutputError
from ..core.models import ReportOptions
from ..core.processor import collect_fields
from ..core.utils import resolve_paths
from ..extractors import EmailExtractor


def list_fields(patterns: Iterable[str], options: ReportOptions,
                extractor: Optional[EmailExtractor] = None) -> List[str]:
    """
    Print the sorted header names found across the given files, one per line.

    The list goes to ``options.output_file`` when set, otherwise to stdout.
    """
    file_paths = resolve_paths(patterns, options.recursive)
    if not file_paths:
        logging.warning("No files found to process.")

    fields = collect_fields(file_paths, options, extractor).sorted()
    output = "".join(f"{name}\n" for name in fields)

    if options.output_file:
        try:
            with open(options.output_file, 'w', encoding='utf-8', newline='') as f:
                f.write(output)
        except OSError as e:
            raise OutputError(options.output_file, "field list", e)
        logging.info(f"Field list written to {options.output_file}")
    else:
        sys.stdout.write(output)

    return fields
