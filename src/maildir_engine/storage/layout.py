# =============================================================================
# Maildir Directory Layout
# =============================================================================
# A Maildir is a directory owning three subdirectories:
#
#   <maildir_root>/
#     tmp/   staging area for in-progress writes
#     new/   delivered, not yet seen
#     cur/   seen and/or flagged
#
# Validity is always checked against the filesystem, never assumed.
# Creation is idempotent and safe over a partially present structure.
# Nothing in this package ever deletes a Maildir.
# =============================================================================

import logging
from os import PathLike
from pathlib import Path

from maildir_engine.storage.result import StorageResult

logger = logging.getLogger(__name__)


TMP = "tmp"
NEW = "new"
CUR = "cur"

# All required subdirectories
SUBDIRS = (CUR, NEW, TMP)

# Subdirectories that hold delivered messages, in listing order
MESSAGE_SUBDIRS = (NEW, CUR)


def is_maildir(path: str | PathLike[str]) -> bool:
    """
    Check whether a path is a valid Maildir.

    A directory is a valid Maildir iff tmp/, new/ and cur/ all exist and
    are directories.

    Args:
        path: Directory to check.

    Returns:
        True if the structure is complete.
    """
    root = Path(path)
    return all((root / subdir).is_dir() for subdir in SUBDIRS)


def create_maildir(path: str | PathLike[str]) -> StorageResult:
    """
    Create a Maildir structure at the given path.

    Missing parent directories are created too. Calling this on an
    existing valid Maildir is a no-op success.

    Args:
        path: Directory to create.

    Returns:
        StorageResult with the Maildir path, or the reason it failed
        (e.g. "new" exists but is a regular file).
    """
    root = Path(path)
    if is_maildir(root):
        return StorageResult.ok(root)

    for subdir in SUBDIRS:
        subpath = root / subdir
        try:
            subpath.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug(f"Could not create {subpath}: {e}")
            return StorageResult.failed(f"Failed to create {subdir} directory: {e}", subpath)

    logger.info(f"Created Maildir structure at {root}")
    return StorageResult.ok(root)
