"""
Path resolution and digest helpers
"""

import glob
import hashlib
import logging
import os
import stat
from typing import Dict, Iterable, List

from .exceptions import DigestError


def expand_pattern(pattern: str) -> List[str]:
    """Expand a glob pattern, falling back to the literal path when nothing matches."""
    matches = sorted(glob.glob(pattern))
    if not matches:
        logging.debug(f"No glob matches for {pattern!r}, using it as a literal path")
        return [pattern]
    return matches


def resolve_paths(patterns: Iterable[str], recursive: bool = False) -> List[str]:
    """
    Expand files, directories and glob patterns into absolute file paths.

    Traversal is depth-first over an explicit stack. Directories are only
    entered when ``recursive`` is set; otherwise they are skipped quietly.

    Args:
        patterns: Paths or glob patterns given by the user
        recursive: Whether to descend into directories

    Returns:
        De-duplicated list of absolute paths of regular files
    """
    stack: List[str] = []
    for pattern in patterns:
        for match in expand_pattern(pattern):
            stack.append(os.path.abspath(os.path.normpath(match)))
    # Pop in the order the user gave the paths
    stack.reverse()

    resolved: List[str] = []
    seen_files = set()
    seen_dirs = set()

    while stack:
        path = stack.pop()
        try:
            st = os.stat(path)
        except OSError as e:
            logging.warning(f"Cannot access {path}: {e.strerror or e}")
            continue

        if stat.S_ISDIR(st.st_mode):
            if not recursive:
                logging.debug(f"Skipping directory {path} (not recursive)")
                continue
            real = os.path.realpath(path)
            if real in seen_dirs:
                continue
            seen_dirs.add(real)
            try:
                children = sorted(os.listdir(path))
            except OSError as e:
                logging.warning(f"Cannot read directory {path}: {e.strerror or e}")
                continue
            for child in reversed(children):
                stack.append(os.path.join(path, child))
        elif not stat.S_ISREG(st.st_mode):
            logging.debug(f"Skipping {path}: not a regular file")
        elif path not in seen_files:
            seen_files.add(path)
            resolved.append(path)

    return resolved


def compute_digests(data: bytes, names: Iterable[str]) -> Dict[str, str]:
    """
    Compute the requested hashlib digests over an in-memory buffer.

    A digest that fails is logged and left out of the result.
    """
    digests = {}
    for name in names:
        try:
            digests[name] = compute_digest(data, name)
        except DigestError as e:
            logging.warning(f"{e.message}: {e.details}")
    return digests


def compute_digest(data: bytes, name: str) -> str:
    try:
        hash_obj = hashlib.new(name)
    except (ValueError, TypeError) as e:
        raise DigestError(name, e)
    hash_obj.update(data)
    return hash_obj.hexdigest()
