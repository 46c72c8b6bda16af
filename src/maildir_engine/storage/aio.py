# =============================================================================
# Async Maildir Facade
# =============================================================================
# Every storage operation blocks on filesystem I/O. Hosts running an event
# loop (a TUI, a sync daemon) must not call them on the loop thread, so
# this wraps Maildir with coroutines that run each call in a worker thread.
#
# No background tasks or timers live here - scheduling periodic work is
# the host application's job.
# =============================================================================

import asyncio
from collections.abc import Iterable, Mapping
from os import PathLike
from pathlib import Path

from maildir_engine.core import MaildirEntry
from maildir_engine.storage.maildir import Maildir
from maildir_engine.storage.result import StorageResult


class AsyncMaildir:
    """
    Coroutine interface to a Maildir.

    Usage:
        >>> drafts = AsyncMaildir(Maildir(drafts_path))
        >>> await drafts.create()
        >>> result = await drafts.deliver(raw_message, flags={"D"})
        >>> entries = await drafts.list({"D": True})

    Attributes:
        maildir: The wrapped synchronous Maildir.
    """

    def __init__(self, maildir: Maildir) -> None:
        self.maildir = maildir

    @property
    def path(self) -> Path:
        return self.maildir.path

    async def is_valid(self) -> bool:
        return await asyncio.to_thread(self.maildir.is_valid)

    async def create(self) -> StorageResult:
        return await asyncio.to_thread(self.maildir.create)

    async def deliver(
        self,
        content: str | bytes,
        flags: Iterable[str] = (),
        subdir: str | None = None,
    ) -> StorageResult:
        return await asyncio.to_thread(self.maildir.deliver, content, flags, subdir)

    async def list(self, flag_filter: Mapping[str, bool] | None = None) -> list[MaildirEntry]:
        return await asyncio.to_thread(self.maildir.list, flag_filter)

    async def read_headers(self, path: str | PathLike[str]) -> dict[str, str] | None:
        return await asyncio.to_thread(self.maildir.read_headers, path)

    async def reconcile(self, path: str | PathLike[str]) -> Path:
        return await asyncio.to_thread(self.maildir.reconcile, path)

    def __repr__(self) -> str:
        return f"AsyncMaildir({str(self.path)!r})"
