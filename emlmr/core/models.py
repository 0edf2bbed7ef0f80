"""
Data models for emlmr
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..config.constants import (
    ALL_FIELDS, DEFAULT_DELIMITER, FILENAME_FIELD, PATH_FIELD, SUPPORTED_DIGESTS
)
from .exceptions import ValidationError

# One parsed message plus its synthetic fields, keyed by lower-case field name
MetadataRow = Mapping[str, str]


class FieldSet:
    """Insert-if-absent set of field names with a sorted snapshot on read."""

    def __init__(self, names: Iterable[str] = ()):
        self._names: Dict[str, None] = {}
        self.update(names)

    def add(self, name: str) -> None:
        if name not in self._names:
            self._names[name] = None

    def update(self, names: Iterable[str]) -> None:
        for name in names:
            self.add(name)

    def sorted(self) -> List[str]:
        return sorted(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"FieldSet({self.sorted()!r})"


@dataclass
class ReportOptions:
    """Run configuration handed to every stage of the report pipeline."""
    fields: List[str] = field(default_factory=lambda: [ALL_FIELDS])
    digests: List[str] = field(default_factory=list)
    recursive: bool = False
    delimiter: str = DEFAULT_DELIMITER
    output_file: Optional[str] = None
    show_progress: bool = True

    def __post_init__(self):
        if not self.fields:
            raise ValidationError('field', self.fields, "at least one field is required")
        for name in self.fields:
            if not name or not name.strip():
                raise ValidationError('field', name, "field names must not be empty")
        self.fields = [name.strip().lower() for name in self.fields]

        digests = []
        for name in self.digests:
            name = name.lower()
            if name not in SUPPORTED_DIGESTS:
                raise ValidationError('digest', name, f"one of {', '.join(SUPPORTED_DIGESTS)}")
            if name not in digests:
                digests.append(name)
        self.digests = digests

        if len(self.delimiter) != 1:
            raise ValidationError('delimiter', self.delimiter, "exactly one character")

    @property
    def include_all(self) -> bool:
        return ALL_FIELDS in self.fields

    @property
    def include_filename(self) -> bool:
        return self.include_all or FILENAME_FIELD in self.fields

    @property
    def include_path(self) -> bool:
        return self.include_all or PATH_FIELD in self.fields


@dataclass(frozen=True)
class ReportSpec:
    """Resolved columns and output sink for one report."""
    columns: Tuple[str, ...]
    output_file: Optional[str] = None
    delimiter: str = DEFAULT_DELIMITER

    @property
    def to_console(self) -> bool:
        return self.output_file is None
