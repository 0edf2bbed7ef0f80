"""
High-level operations behind the emlmr command line
"""

from .fields import list_fields
from .report import run_report

__all__ = ['list_fields', 'run_report']
