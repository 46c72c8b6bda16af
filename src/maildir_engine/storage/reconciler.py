# =============================================================================
# Size Reconciler
# =============================================================================
# New filenames are generated with S=0 because the size isn't known until
# the content is written. This brings the S= field back in line with the
# file's real size by renaming the file.
#
# Every failure here is soft: a stale size in a filename is a consistency
# nit, not data loss, so the original path is returned unchanged.
# =============================================================================

import logging
from os import PathLike
from pathlib import Path

from maildir_engine.codec import parse_filename, with_size
from maildir_engine.storage.writer import atomic_rename

logger = logging.getLogger(__name__)


def update_size(filepath: str | PathLike[str]) -> Path:
    """
    Correct the S= size in a message filename.

    Args:
        filepath: Path to a message file inside new/ or cur/.

    Returns:
        The new path if the file was renamed, otherwise the original path
        (file missing, name not decodable, size already correct, or the
        rename failed).
    """
    path = Path(filepath)

    try:
        actual_size = path.stat().st_size
    except OSError:
        return path

    name = parse_filename(path.name)
    if name is None or name.size_bytes == actual_size:
        return path

    new_path = path.with_name(with_size(name, actual_size))

    # Never replace a different message that already owns the new name
    result = atomic_rename(path, new_path, no_clobber=True)
    if not result:
        logger.debug(f"Size update for {path.name} skipped: {result.error}")
        return path

    logger.debug(f"Updated Maildir filename size: {path.name} -> {new_path.name} ({actual_size} bytes)")
    return new_path
