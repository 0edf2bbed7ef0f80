"""
Report renderers for emlmr
"""

from typing import Mapping, Sequence

from ..core.models import ReportSpec
from .base import BaseReporter
from .delimited import DelimitedReporter
from .table import TableReporter

__all__ = ['BaseReporter', 'DelimitedReporter', 'TableReporter', 'get_reporter', 'write_report']


def get_reporter(spec: ReportSpec) -> BaseReporter:
    """Console table when no output file is set, delimited text otherwise."""
    if spec.to_console:
        return TableReporter()
    return DelimitedReporter(spec.delimiter)


def write_report(spec: ReportSpec, rows: Sequence[Mapping[str, str]]) -> None:
    get_reporter(spec).write_report(spec.columns, rows, spec.output_file)
