"""
Header metadata extractor for RFC 5322 / MIME email messages
"""

import io
import logging
import re
from email import errors as email_errors
from email import policy
from email.charset import UNKNOWN8BIT
from email.header import Header, decode_header, make_header
from email.parser import BytesParser
from typing import BinaryIO, Callable, Dict, Iterable, Optional, Tuple

from ..core.exceptions import MessageParseError

HeaderParser = Callable[[BinaryIO], Iterable[Tuple[str, object]]]
HeaderDecoder = Callable[[object], str]

# Line break plus the folding whitespace after it
_FOLD_RE = re.compile(r'\r?\n[ \t]+')


def parse_headers(stream: BinaryIO) -> Iterable[Tuple[str, object]]:
    """Parse a byte stream into (name, raw value) header pairs."""
    message = BytesParser(policy=policy.compat32).parse(stream, headersonly=True)
    return message.items()


def _decode_8bit(data: bytes) -> str:
    """Decode raw 8-bit header bytes as UTF-8, falling back to latin-1."""
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError:
        return data.decode('latin-1')


def _unescape_8bit(value: object) -> object:
    """Recover the text of header values that arrived as raw 8-bit bytes."""
    if isinstance(value, Header):
        # compat32 wraps 8-bit header text in an unknown-8bit Header
        return ''.join(
            _decode_8bit(fragment) if charset == UNKNOWN8BIT
            else fragment.decode(charset or 'ascii', 'replace')
            for fragment, charset in decode_header(value)
        )
    if isinstance(value, str):
        try:
            value.encode('utf-8')
        except UnicodeEncodeError:
            # Surrogate-escaped bytes from a bytes parser
            return _decode_8bit(value.encode('utf-8', 'surrogateescape'))
    return value


def decode_header_value(value: object) -> str:
    """Decode RFC 2047 encoded words in a raw header value into display text."""
    value = _unescape_8bit(value)
    if isinstance(value, str) and '=?' not in value:
        return _FOLD_RE.sub(' ', value).strip()
    try:
        text = str(make_header(decode_header(value)))
    except (email_errors.HeaderParseError, LookupError, UnicodeError, ValueError) as e:
        logging.debug(f"Could not decode header value {value!r}: {e}")
        text = str(value)
    return _FOLD_RE.sub(' ', text).strip()


class EmailExtractor:
    """
    Extract a field name to value mapping from the headers of one message.

    The structural parsing is delegated to ``parser`` and the encoded-word
    decoding to ``decoder``; both default to the standard library ``email``
    package.
    """

    def __init__(self, parser: Optional[HeaderParser] = None, decoder: Optional[HeaderDecoder] = None):
        self.parser = parser or parse_headers
        self.decoder = decoder or decode_header_value

    def extract(self, stream: BinaryIO, source: str = "<stream>") -> Dict[str, str]:
        """
        Extract header metadata from a binary stream.

        Args:
            stream: Readable binary stream positioned at the start of the message
            source: Name used in error messages, usually the file path

        Returns:
            Dictionary of lower-case header name to decoded value. Only the
            first occurrence of a repeated header is kept.

        Raises:
            MessageParseError: If the stream cannot be parsed or has no headers
        """
        try:
            items = list(self.parser(stream))
        except (email_errors.MessageError, UnicodeError, ValueError) as e:
            raise MessageParseError(source, e)

        if not items:
            raise MessageParseError(source, ValueError("no header fields found"))

        headers: Dict[str, str] = {}
        for name, value in items:
            key = str(name).strip().lower()
            if not key or key in headers:
                continue
            headers[key] = self.decoder(value)
        return headers

    def extract_bytes(self, data: bytes, source: str = "<bytes>") -> Dict[str, str]:
        """Extract header metadata from an in-memory message."""
        return self.extract(io.BytesIO(data), source)
