"""
Core message processing logic and report assembly
"""

import logging
import os
import sys
from contextlib import contextmanager
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from ..config.constants import FILENAME_FIELD, PATH_FIELD
from ..extractors import EmailExtractor, get_extractor_for_file
from .exceptions import MessageParseError
from .models import FieldSet, MetadataRow, ReportOptions, ReportSpec
from .utils import compute_digests


class Report:
    """Accumulates one row per message and decides the report columns."""

    def __init__(self, options: ReportOptions):
        self.options = options
        self.rows: List[MetadataRow] = []
        self.fields_seen = FieldSet()

    def add_row(self, path: str, metadata: Mapping[str, str],
                digests: Optional[Mapping[str, str]] = None) -> MetadataRow:
        """
        Build and store the row for one message.

        Args:
            path: Absolute path of the message file
            metadata: Decoded header fields of the message
            digests: Digest name to hex string, if any were computed

        Returns:
            The stored read-only row
        """
        row: Dict[str, str] = dict(metadata)
        if digests:
            row.update(digests)
        if self.options.include_filename:
            row[FILENAME_FIELD] = os.path.basename(path)
        if self.options.include_path:
            row[PATH_FIELD] = path

        frozen = MappingProxyType(row)
        self.rows.append(frozen)
        self.fields_seen.update(row)
        return frozen

    def columns(self) -> List[str]:
        if self.options.include_all:
            columns = self.fields_seen.sorted()
        else:
            columns = list(self.options.fields)

        # Digest columns are always reported
        for name in self.options.digests:
            if name not in columns:
                columns.append(name)
        return columns

    def build_spec(self) -> ReportSpec:
        return ReportSpec(
            columns=tuple(self.columns()),
            output_file=self.options.output_file,
            delimiter=self.options.delimiter,
        )

    def __len__(self) -> int:
        return len(self.rows)


def read_file(file_path: str) -> Optional[bytes]:
    """Read a whole file, logging and returning None if it cannot be read."""
    try:
        with open(file_path, 'rb') as f:
            return f.read()
    except OSError as e:
        logging.warning(f"Cannot read {file_path}: {e.strerror or e}")
        return None


def process_file(file_path: str, options: ReportOptions,
                 extractor: Optional[EmailExtractor] = None) -> Optional[Tuple[Dict[str, str], Dict[str, str]]]:
    """
    Extract header metadata and digests from one message file.

    The file is read once; headers and digests are both computed from the
    same buffer.

    Returns:
        ``(metadata, digests)``, or None if the file could not be read or parsed
    """
    if extractor is None:
        extractor = get_extractor_for_file(file_path)

    data = read_file(file_path)
    if data is None:
        return None

    try:
        metadata = extractor.extract_bytes(data, file_path)
    except MessageParseError as e:
        logging.warning(f"{e.message}: {e.details}")
        return None

    digests = compute_digests(data, options.digests) if options.digests else {}
    return metadata, digests


def _progress(file_paths: List[str], options: ReportOptions, desc: str):
    return tqdm.tqdm(
        file_paths,
        desc=desc,
        unit="file",
        disable=not options.show_progress or len(file_paths) <= 1,
    )


@contextmanager
def _logging_under_progress():
    """Route console logging through tqdm, keeping the console handler's level."""
    root = logging.getLogger()
    before = list(root.handlers)
    console_levels = [
        handler.level for handler in before
        if isinstance(handler, logging.StreamHandler) and handler.stream in (sys.stdout, sys.stderr)
    ]
    with logging_redirect_tqdm():
        if console_levels:
            for handler in root.handlers:
                if handler not in before:
                    handler.setLevel(console_levels[-1])
        yield


def process_files(file_paths: List[str], options: ReportOptions,
                  extractor: Optional[EmailExtractor] = None) -> Report:
    """
    Process message files one at a time and assemble the report.

    Args:
        file_paths: Resolved absolute file paths
        options: Report options
        extractor: Header extractor, defaults to the stdlib email parser

    Returns:
        Report holding one row per successfully parsed message
    """
    if extractor is None:
        extractor = get_extractor_for_file()

    report = Report(options)
    with _logging_under_progress():
        for file_path in _progress(file_paths, options, "Reading messages"):
            result = process_file(file_path, options, extractor)
            if result is None:
                continue
            metadata, digests = result
            report.add_row(file_path, metadata, digests)

    logging.debug(f"Parsed {len(report)} of {len(file_paths)} files")
    return report


def collect_fields(file_paths: List[str], options: ReportOptions,
                   extractor: Optional[EmailExtractor] = None) -> FieldSet:
    """Collect the header names found across message files."""
    if extractor is None:
        extractor = get_extractor_for_file()

    fields = FieldSet()
    with _logging_under_progress():
        for file_path in _progress(file_paths, options, "Scanning fields"):
            try:
                with open(file_path, 'rb') as f:
                    metadata = extractor.extract(f, file_path)
            except OSError as e:
                logging.warning(f"Cannot read {file_path}: {e.strerror or e}")
                continue
            except MessageParseError as e:
                logging.warning(f"{e.message}: {e.details}")
                continue
            fields.update(metadata)
    return fields
