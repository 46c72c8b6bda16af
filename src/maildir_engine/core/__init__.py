# =============================================================================
# Maildir Engine Core Module
# =============================================================================
# Pure data models with no I/O and no dependencies on the rest of the
# package, so they can be imported anywhere:
#   - FlagSet: canonical set of single-character message flags
#   - MaildirName: the decoded form of a Maildir filename
#   - MaildirEntry: a decoded filename plus where it lives on disk
# =============================================================================

from maildir_engine.core.flags import (
    DRAFT,
    FLAGGED,
    PASSED,
    REPLIED,
    SEEN,
    TRASHED,
    FlagSet,
)
from maildir_engine.core.name import FALLBACK_HOST, MaildirEntry, MaildirName

__all__ = [
    "FlagSet",
    "MaildirName",
    "MaildirEntry",
    "FALLBACK_HOST",
    # Conventional flags
    "DRAFT",
    "FLAGGED",
    "PASSED",
    "REPLIED",
    "SEEN",
    "TRASHED",
]
