"""
emlmr - EML Metadata Report
"""

__version__ = "1.0.0"

from .core.models import FieldSet, ReportOptions, ReportSpec
from .core.processor import Report, process_file, process_files
from .core.utils import compute_digests, resolve_paths
from .main import main
from .operations import list_fields, run_report

__all__ = [
    'main', 'run_report', 'list_fields', 'process_file', 'process_files', 'resolve_paths',
    'compute_digests', 'Report', 'ReportOptions', 'ReportSpec', 'FieldSet',
]
