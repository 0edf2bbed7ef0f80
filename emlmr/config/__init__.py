"""
Configuration constants for emlmr
"""

from .constants import VERSION, SUPPORTED_DIGESTS, ALL_FIELDS, DEFAULT_DELIMITER

__all__ = ['VERSION', 'SUPPORTED_DIGESTS', 'ALL_FIELDS', 'DEFAULT_DELIMITER']
