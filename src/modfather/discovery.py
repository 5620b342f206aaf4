"""Find PHP source files under the requested paths."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from modfather.extractors.php import is_php_file

logger = logging.getLogger(__name__)

DEFAULT_SKIP_DIRS = {".git", "vendor", "node_modules"}


def find_php_files(paths: list[Path], exclude: list[str] | None = None) -> list[Path]:
    """Return PHP files found in *paths* (files or directories), sorted per root.

    Directories named in *exclude* or :data:`DEFAULT_SKIP_DIRS` are not
    descended into.  Explicitly listed files are kept regardless of suffix.
    """
    skip = DEFAULT_SKIP_DIRS | set(exclude or ())
    files: list[Path] = []

    for path in paths:
        if path.is_file():
            files.append(path)
            continue
        found: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(path, followlinks=False):
            for skipped in sorted(set(dirnames) & skip):
                logger.debug("Skipping directory %s", Path(dirpath) / skipped)
            dirnames[:] = [d for d in dirnames if d not in skip]
            for filename in filenames:
                candidate = Path(dirpath) / filename
                if is_php_file(candidate):
                    found.append(candidate)
        files.extend(sorted(found))

    logger.debug("Found %d PHP files", len(files))
    return files


def read_source(path: Path) -> bytes | None:
    """Return the raw bytes of *path*, or None (with a warning) if unreadable."""
    try:
        return path.read_bytes()
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None
