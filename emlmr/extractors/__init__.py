"""
Metadata extractors for emlmr
"""

from typing import Optional

from .eml import EmailExtractor, decode_header_value, parse_headers

__all__ = ['EmailExtractor', 'decode_header_value', 'parse_headers', 'get_extractor_for_file']


def get_extractor_for_file(file_path: Optional[str] = None) -> EmailExtractor:
    """Return the extractor to use for a file; every input is read as a message."""
    return EmailExtractor()
