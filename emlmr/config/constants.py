"""
Constants used throughout emlmr
"""

VERSION = "1.0.0"

# Digest algorithms that may be requested with --digest, all from hashlib
SUPPORTED_DIGESTS = ('md5', 'sha1', 'sha256', 'sha512')

# Field selection sentinel: report every field seen in any message
ALL_FIELDS = 'all'

# Synthetic fields computed from the resolved path, not the message
FILENAME_FIELD = 'filename'
PATH_FIELD = 'path'

DEFAULT_DELIMITER = ','

# Spellings accepted by --delimiter for a tab character
TAB_ALIASES = ('\\t', 'tab', 'TAB')
