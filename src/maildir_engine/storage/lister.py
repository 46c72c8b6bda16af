# =============================================================================
# Directory Lister
# =============================================================================
# Enumerates the messages of a Maildir by decoding the filenames in new/
# and cur/. Nothing is cached: every call re-scans the filesystem, and no
# lock is taken, so a delivery racing with a listing may or may not show
# up in it. A listing is a best-effort snapshot.
#
# Skipped silently:
#   - hidden entries (names starting with ".")
#   - anything that isn't a regular file
#   - names no grammar can decode (e.g. README.md)
#   - a missing new/ or cur/ directory
# =============================================================================

import logging
import os
from collections.abc import Iterator, Mapping
from os import PathLike
from pathlib import Path

from maildir_engine.codec import parse_filename
from maildir_engine.core import MaildirEntry, MaildirName
from maildir_engine.storage.layout import MESSAGE_SUBDIRS

logger = logging.getLogger(__name__)


def matches_filter(name: MaildirName, flag_filter: Mapping[str, bool] | None) -> bool:
    """
    Check a decoded name against a flag filter.

    The filter expresses required presence only: every flag mapped to True
    must be set. Flags mapped to False are not checked. An empty or None
    filter matches everything.
    """
    if not flag_filter:
        return True
    return all(flag in name.flags for flag, required in flag_filter.items() if required)


def _scan_subdir(root: Path, subdir: str) -> Iterator[MaildirEntry]:
    """Yield decoded entries from one message subdirectory."""
    dir_path = root / subdir
    try:
        with os.scandir(dir_path) as it:
            dir_entries = list(it)
    except OSError as e:
        logger.debug(f"Skipping {dir_path}: {e}")
        return

    for dir_entry in dir_entries:
        if dir_entry.name.startswith("."):
            continue
        try:
            if not dir_entry.is_file():
                continue
        except OSError:
            # Vanished between scandir and stat
            continue

        name = parse_filename(dir_entry.name)
        if name is None:
            continue

        yield MaildirEntry(name=name, path=dir_path / dir_entry.name, subdir=subdir)


def list_messages(
    maildir_path: str | PathLike[str],
    flag_filter: Mapping[str, bool] | None = None,
) -> list[MaildirEntry]:
    """
    List the messages in a Maildir, newest first.

    Args:
        maildir_path: Maildir root (the directory containing new/ and cur/).
        flag_filter: Optional mapping of flag -> required, e.g. {"D": True}
                     to list drafts only.

    Returns:
        Entries from new/ and cur/ sorted by timestamp, descending. The
        relative order of entries with equal timestamps is unspecified.

    Example:
        >>> drafts = list_messages(Path("~/Mail/work/Drafts").expanduser(), {"D": True})
        >>> [entry.filename for entry in drafts]
    """
    root = Path(maildir_path).absolute()
    entries = [
        entry
        for subdir in MESSAGE_SUBDIRS
        for entry in _scan_subdir(root, subdir)
        if matches_filter(entry.name, flag_filter)
    ]
    entries.sort(key=lambda entry: entry.timestamp, reverse=True)
    return entries
