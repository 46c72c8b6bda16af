# =============================================================================
# Maildir Facade
# =============================================================================
# Binds one Maildir directory to the codec, writer, lister and reconciler
# so callers (a draft store, a sync layer, a UI) don't have to thread the
# tmp/new/cur paths around themselves.
#
# The facade holds no state beyond its path and options; every call goes
# back to the filesystem.
# =============================================================================

import logging
from collections.abc import Iterable, Mapping
from os import PathLike
from pathlib import Path
from typing import TYPE_CHECKING

from maildir_engine.codec import generate_filename
from maildir_engine.core import MaildirEntry
from maildir_engine.storage.headers import read_headers
from maildir_engine.storage.layout import CUR, NEW, TMP, create_maildir, is_maildir
from maildir_engine.storage.lister import list_messages
from maildir_engine.storage.reconciler import update_size
from maildir_engine.storage.result import StorageResult
from maildir_engine.storage.writer import atomic_write

if TYPE_CHECKING:
    from maildir_engine.config import Config

logger = logging.getLogger(__name__)


class Maildir:
    """
    A single Maildir directory.

    Usage:
        >>> drafts = Maildir(Path("~/Mail/personal/Drafts").expanduser())
        >>> drafts.create()
        >>> result = drafts.deliver(raw_message, flags={"D"})
        >>> for entry in drafts.list({"D": True}):
        ...     print(entry.filename, drafts.read_headers(entry.path)["subject"])

    Attributes:
        path: Maildir root directory.
        hostname: Host segment for generated filenames (None = system hostname).
        fsync: Flush staged content to disk before the rename.
        delivery_attempts: Fresh filenames to try when a delivery collides.
    """

    def __init__(
        self,
        path: str | PathLike[str],
        *,
        hostname: str | None = None,
        fsync: bool = True,
        delivery_attempts: int = 3,
    ) -> None:
        if delivery_attempts < 1:
            raise ValueError(f"delivery_attempts must be >= 1, got {delivery_attempts}")
        self.path = Path(path)
        self.hostname = hostname or None
        self.fsync = fsync
        self.delivery_attempts = delivery_attempts

    @classmethod
    def from_config(cls, config: "Config", folder: str, account: str | None = None) -> "Maildir":
        """
        Build a Maildir for an account folder using the configured paths
        and storage options.
        """
        return cls(
            config.maildir_path(folder, account=account),
            hostname=config.storage.hostname,
            fsync=config.storage.fsync,
            delivery_attempts=config.storage.delivery_attempts,
        )

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    @property
    def tmp(self) -> Path:
        return self.path / TMP

    @property
    def new(self) -> Path:
        return self.path / NEW

    @property
    def cur(self) -> Path:
        return self.path / CUR

    def is_valid(self) -> bool:
        """Returns True if tmp/, new/ and cur/ all exist as directories."""
        return is_maildir(self.path)

    def create(self) -> StorageResult:
        """Create the directory structure (no-op if already valid)."""
        return create_maildir(self.path)

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def deliver(
        self,
        content: str | bytes,
        flags: Iterable[str] = (),
        subdir: str | None = None,
    ) -> StorageResult:
        """
        Store a new message.

        Generates a filename, writes through tmp/, and corrects the S= size
        once the content is in place. A collision with an existing name is
        retried with a fresh name up to delivery_attempts times.

        Args:
            content: Full message (headers and body).
            flags: Flag characters for the message, e.g. {"D"} for a draft.
            subdir: "new" or "cur". Defaults to cur/ when flags are given
                    (flags only mean something in cur/), new/ otherwise.

        Returns:
            StorageResult whose path is the final, size-corrected path.
        """
        flags = list(flags)
        if subdir is None:
            subdir = CUR if flags else NEW
        if subdir not in (NEW, CUR):
            raise ValueError(f"subdir must be {NEW!r} or {CUR!r}, got {subdir!r}")

        result = StorageResult.failed("No delivery attempted", self.path / subdir)
        for attempt in range(1, self.delivery_attempts + 1):
            target = self.path / subdir / generate_filename(flags, host=self.hostname)
            result = atomic_write(self.tmp, target, content, no_clobber=True, fsync=self.fsync)
            if result or not result.collision:
                break
            logger.debug(f"Filename collision on attempt {attempt}: {target.name}")

        if not result:
            return result

        return StorageResult.ok(update_size(result.path))

    def list(self, flag_filter: Mapping[str, bool] | None = None) -> list[MaildirEntry]:
        """List messages newest first, optionally requiring flags."""
        return list_messages(self.path, flag_filter)

    def read_headers(self, path: str | PathLike[str]) -> dict[str, str] | None:
        """Read a message's header block (see storage.headers)."""
        return read_headers(path)

    def reconcile(self, path: str | PathLike[str]) -> Path:
        """Bring a message's S= size in line with its real size."""
        return update_size(path)

    def __repr__(self) -> str:
        return f"Maildir({str(self.path)!r})"
