"""Directory scanner for shell scripts.

Lists the top-level entries of a scripts directory. Navigation entries
and anything carrying the reserved ``skip.`` prefix are dropped; no
recursion into subdirectories takes place.
"""

import logging
from pathlib import Path

from scriptsort.core.errors import DirectoryError

logger = logging.getLogger(__name__)

SKIP_PREFIX = "skip."

_NAVIGATION_ENTRIES: frozenset[str] = frozenset({".", ".."})


def is_skipped(name: str) -> bool:
    """Check if a directory entry is excluded from every output mode.

    Args:
        name: Entry name (basename).

    Returns:
        True for navigation entries and ``skip.``-prefixed names.
    """
    return name in _NAVIGATION_ENTRIES or name.startswith(SKIP_PREFIX)


def scan_directory(directory: Path) -> list[str]:
    """List the script names contained in a directory.

    Names are returned in the order the filesystem yields them; ordering
    is the sorter's job.

    Args:
        directory: Directory to scan.

    Returns:
        Names of all entries that are not skipped.

    Raises:
        DirectoryError: If the directory cannot be opened or listed.
    """
    try:
        children = list(directory.iterdir())
    except OSError as e:
        raise DirectoryError(directory, e.strerror or str(e)) from e

    names: list[str] = []
    for child in children:
        if is_skipped(child.name):
            logger.debug("Skipping %s", child.name)
            continue
        names.append(child.name)

    logger.debug("Scanned %d entries in %s", len(names), directory)
    return names
