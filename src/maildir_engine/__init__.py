# =============================================================================
# maildir-engine: Maildir Storage for Mail Clients
# =============================================================================
#
# A storage engine for Maildir mailboxes that interoperates with the
# filenames other tools leave behind (mbsync, classic Maildir writers,
# legacy clients) while writing its own messages crash-safely.
#
# Features:
#   - Filename codec: encode new names, decode three historical grammars
#   - Atomic delivery through tmp/ with a single rename into new/ or cur/
#   - Flag-aware, newest-first message listing
#   - Header-block reader with folding support
#   - Size reconciliation for the S= filename field
#   - XDG-compliant TOML configuration for account/folder paths
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "maildir-engine"

from maildir_engine.codec import generate_filename, parse_filename
from maildir_engine.config import Config, ConfigError
from maildir_engine.core import FlagSet, MaildirEntry, MaildirName
from maildir_engine.storage import (
    AsyncMaildir,
    Maildir,
    StorageResult,
    atomic_write,
    create_maildir,
    is_maildir,
    list_messages,
    read_headers,
    update_size,
)

__all__ = [
    "__version__",
    "__app_name__",
    # Models
    "FlagSet",
    "MaildirName",
    "MaildirEntry",
    # Codec
    "generate_filename",
    "parse_filename",
    # Storage
    "Maildir",
    "AsyncMaildir",
    "StorageResult",
    "atomic_write",
    "create_maildir",
    "is_maildir",
    "list_messages",
    "read_headers",
    "update_size",
    # Config
    "Config",
    "ConfigError",
]
