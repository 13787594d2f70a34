from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from .archive import Archive
from .directory import Directory
from .entry import Entry
from .errors import ArchiveFormatError
from .logging_utils import get_logger

logger = get_logger(__name__)


def iter_entries(archive: Archive) -> Iterator[Tuple[Directory, Entry]]:
    """Yield every (directory, entry) pair in on-disk order."""
    for directory in archive.directories:
        for entry in directory.entries:
            yield directory, entry


def _matches(path: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(path.lower(), p.lower()) for p in patterns)


def find_entry(archive: Archive, pattern: str) -> Optional[Entry]:
    """Return the first entry whose archive path matches the glob ``pattern``."""
    for directory, entry in iter_entries(archive):
        if _matches(directory.get_path_for(entry), [pattern]):
            return entry
    return None


def read_entry(archive: Archive, pattern: str) -> Optional[bytes]:
    """Find a single entry and return its content as a bytes object."""
    entry = find_entry(archive, pattern)
    if entry is None:
        logger.error("Entry matching '%s' not found in %s", pattern, archive.name)
        return None
    logger.debug("Found entry in archive: %s", entry.full_name)
    return entry.read_data()


def extract_archive(
    archive: Archive,
    output_dir: str | os.PathLike,
    patterns: Optional[Sequence[str]] = None,
    verbose: bool = False,
) -> int:
    """
    Extract entries from a loaded archive into ``output_dir``. If patterns
    are provided, only entries whose path matches one of them are written.
    Returns the number of entries written. An entry whose path would land
    outside ``output_dir`` raises ArchiveFormatError before anything is
    written for it.
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    root = output_path.resolve()

    count = 0
    current: Optional[Directory] = None
    for directory, entry in iter_entries(archive):
        entry_path = directory.get_path_for(entry)
        if patterns and not _matches(entry_path, patterns):
            continue

        if verbose and directory is not current:
            logger.info("\t%s", directory.path)
            current = directory

        full_path = output_path / entry_path
        if not full_path.resolve().is_relative_to(root):
            raise ArchiveFormatError(f"Entry path escapes the output directory: {entry_path}")
        full_path.parent.mkdir(parents=True, exist_ok=True)
        if verbose:
            logger.info("\t\t%s", entry.full_name)
        else:
            logger.debug("Unpacking: %s", full_path)

        entry.extract(full_path)
        count += 1

    logger.info("Extracted %d entries from %s to %s", count, archive.name, output_path)
    return count
