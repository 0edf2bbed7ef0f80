"""
Report operation: resolve, extract, assemble, render
"""

import logging
from typing import Iterable, Optional

from ..core.models import ReportOptions
from ..core.processor import Report, process_files
from ..core.utils import resolve_paths
from ..extractors import EmailExtractor
from ..reporters import write_report


def run_report(patterns: Iterable[str], options: ReportOptions,
               extractor: Optional[EmailExtractor] = None) -> Report:
    """
    Build a metadata report for the given files and write it out.

    Args:
        patterns: Files, directories or glob patterns
        options: Report options; ``output_file`` selects delimited output
        extractor: Header extractor, defaults to the stdlib email parser

    Returns:
        The assembled report

    Raises:
        OutputError: If the output file cannot be written
    """
    file_paths = resolve_paths(patterns, options.recursive)
    if not file_paths:
        logging.warning("No files found to process.")
    else:
        logging.info(f"Processing {len(file_paths)} files...")

    report = process_files(file_paths, options, extractor)
    spec = report.build_spec()
    write_report(spec, report.rows)

    if spec.output_file:
        logging.info(f"Report written to {spec.output_file}")
    return report
