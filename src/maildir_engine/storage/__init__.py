# =============================================================================
# Storage Module
# =============================================================================
# Filesystem side of the Maildir engine.
#
# Provides:
#   - Maildir structure checks and idempotent creation
#   - Crash-safe writes (stage in tmp/, single rename into new/ or cur/)
#   - Flag-aware, newest-first listing of new/ and cur/
#   - Header-block reading
#   - Filename size reconciliation
#   - Maildir / AsyncMaildir facades tying it all to one directory
#
# I/O failures come back as StorageResult values (or None), not exceptions.
# =============================================================================

from maildir_engine.storage.aio import AsyncMaildir
from maildir_engine.storage.headers import read_headers
from maildir_engine.storage.layout import (
    CUR,
    NEW,
    SUBDIRS,
    TMP,
    create_maildir,
    is_maildir,
)
from maildir_engine.storage.lister import list_messages, matches_filter
from maildir_engine.storage.maildir import Maildir
from maildir_engine.storage.reconciler import update_size
from maildir_engine.storage.result import StorageResult
from maildir_engine.storage.writer import atomic_rename, atomic_write, staging_filename

__all__ = [
    # Facades
    "Maildir",
    "AsyncMaildir",
    # Layout
    "is_maildir",
    "create_maildir",
    "SUBDIRS",
    "TMP",
    "NEW",
    "CUR",
    # Operations
    "atomic_write",
    "atomic_rename",
    "staging_filename",
    "list_messages",
    "matches_filter",
    "read_headers",
    "update_size",
    "StorageResult",
]
