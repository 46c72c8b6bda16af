# =============================================================================
# Atomic Writer
# =============================================================================
# The only path by which content crosses from tmp/ into new/ or cur/.
#
#   1. Create a uniquely named staging file in tmp/ (exclusive create)
#   2. Write the content in full and fsync it
#   3. Rename the staging file onto the target in one filesystem operation
#
# A reader of the target directory sees either no file or the complete
# file, never a partial one. If anything fails, the staging file is removed
# and the target is left untouched - a crash mid-write leaves at most a
# stray file in tmp/, never a truncated message in new/ or cur/.
# =============================================================================

import errno
import itertools
import logging
import os
import time
from os import PathLike
from pathlib import Path
from typing import BinaryIO

from maildir_engine.codec import local_hostname
from maildir_engine.storage.result import StorageResult

logger = logging.getLogger(__name__)


# Per-process counter so two staging names from one process never collide
_staging_counter = itertools.count()

# errno values meaning "this filesystem can't hard-link"
_NO_LINK_ERRNOS = {errno.EPERM, errno.EOPNOTSUPP, errno.ENOTSUP, errno.EMLINK}


def staging_filename() -> str:
    """
    Generate a throwaway name for a file in tmp/.

    Built from timestamp, process id, a per-process counter and the host.
    It does not follow the message filename grammar; it is discarded as
    soon as the file is renamed into place.
    """
    return f"{int(time.time())}.P{os.getpid()}Q{next(_staging_counter)}.{local_hostname()}"


def _write_fully(f: BinaryIO, data: bytes) -> None:
    """Write all of data, looping over short writes."""
    view = memoryview(data)
    while view:
        written = f.write(view)
        view = view[written:]


def _remove_quietly(path: Path) -> None:
    """Remove a staging file; a file that's already gone is fine."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug(f"Could not remove staging file {path}: {e}")


def atomic_rename(
    src: str | PathLike[str],
    dst: str | PathLike[str],
    *,
    no_clobber: bool = False,
) -> StorageResult:
    """
    Move src to dst as a single filesystem operation.

    Args:
        src: Existing file.
        dst: New path, on the same filesystem.
        no_clobber: If True, refuse to replace an existing dst and report
                    a collision instead. Uses link-then-unlink so the
                    check and the move can't race; falls back to an
                    exists-check plus rename on filesystems without hard
                    links.

    Returns:
        StorageResult with dst on success. On failure src is left where
        it was. If no_clobber linked dst but src couldn't be unlinked, the
        result is still a success and src remains as a hard-linked
        duplicate; atomic_write retries removing its staging file.
    """
    src, dst = Path(src), Path(dst)

    if not no_clobber:
        try:
            os.rename(src, dst)
        except OSError as e:
            return StorageResult.failed(f"Failed to move file to target {dst}: {e}", dst)
        return StorageResult.ok(dst)

    try:
        os.link(src, dst)
    except FileExistsError:
        return StorageResult.failed(f"Target already exists: {dst}", dst, collision=True)
    except OSError as e:
        if e.errno not in _NO_LINK_ERRNOS:
            return StorageResult.failed(f"Failed to move file to target {dst}: {e}", dst)
        # No hard links here - best effort check, then a plain rename
        if dst.exists():
            return StorageResult.failed(f"Target already exists: {dst}", dst, collision=True)
        return atomic_rename(src, dst)

    try:
        os.unlink(src)
    except OSError as e:
        # dst is complete; the leftover src name is only a stale duplicate
        logger.debug(f"Could not unlink {src} after linking to {dst}: {e}")
    return StorageResult.ok(dst)


def atomic_write(
    staging_dir: str | PathLike[str],
    target_path: str | PathLike[str],
    content: str | bytes,
    *,
    no_clobber: bool = False,
    fsync: bool = True,
) -> StorageResult:
    """
    Write content to target_path via a staging file in staging_dir.

    Args:
        staging_dir: The Maildir's tmp/ directory.
        target_path: Final path, normally inside new/ or cur/.
        content: Message content. str is encoded as UTF-8.
        no_clobber: Report a collision instead of replacing an existing
                    target (see atomic_rename).
        fsync: Flush the staging file to disk before the rename.

    Returns:
        StorageResult with target_path on success. On any failure the
        staging file is removed and the target is never touched.
    """
    staging_path = Path(staging_dir) / staging_filename()
    target = Path(target_path)
    data = content.encode("utf-8") if isinstance(content, str) else bytes(content)

    try:
        f = open(staging_path, "xb")
    except OSError as e:
        logger.debug(f"Could not create staging file {staging_path}: {e}")
        return StorageResult.failed(f"Failed to create temporary file {staging_path}: {e}", target)

    try:
        with f:
            _write_fully(f, data)
            f.flush()
            if fsync:
                os.fsync(f.fileno())
    except OSError as e:
        logger.debug(f"Write to {staging_path} failed: {e}")
        _remove_quietly(staging_path)
        return StorageResult.failed(f"Failed to write content: {e}", target)

    result = atomic_rename(staging_path, target, no_clobber=no_clobber)

    # After a link whose unlink failed, the staging name is a stray duplicate
    _remove_quietly(staging_path)
    if not result:
        return result

    logger.debug(f"Maildir atomic write successful: {staging_path} -> {target} ({len(data)} bytes)")
    return result
