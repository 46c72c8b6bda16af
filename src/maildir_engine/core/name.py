# =============================================================================
# Maildir Name Model
# =============================================================================
# A Maildir message has no index file: its identity, size and state all
# live in the filename. These models are the decoded form of that filename.
#
#   MaildirName:  what a filename says (timestamp, token, host, size, flags)
#   MaildirEntry: a MaildirName found on disk (adds path and subdirectory)
#
# Both are transient. They are built on decode and thrown away after use;
# the filesystem is always the source of truth.
# =============================================================================

from dataclasses import dataclass, field
from pathlib import Path

from maildir_engine.core.flags import FlagSet


# Host used when a filename has no host segment or the hostname is unknown
FALLBACK_HOST = "localhost"


@dataclass(frozen=True)
class MaildirName:
    """
    Decoded form of a Maildir filename.

    Attributes:
        timestamp: Delivery time in seconds since the epoch (leading digits).
        unique_token: Uniqueness key. Depending on the producer this is a
                      clock reading, a process id, or a compound
                      "<clock>_<suffix>" value. Treated as opaque.
        host: Delivering host, or FALLBACK_HOST when the name has none.
        size_bytes: Size from the "S=" info token, 0 when absent.
        uid: Synchronizer UID from the "U=" info token, if present.
        flags: Flag characters after the ":2," marker.
        raw_filename: The original filename, kept for round-trips.
        info: Raw info segment between the host and the flags. Kept so that
              tokens we do not interpret survive a re-encode.
        grammar: Name of the filename grammar that matched.
    """
    timestamp: int
    unique_token: str
    host: str = FALLBACK_HOST
    size_bytes: int = 0
    uid: int | None = None
    flags: FlagSet = field(default_factory=FlagSet)
    raw_filename: str = ""
    info: str = ""
    grammar: str = ""

    def has_flag(self, flag: str) -> bool:
        """Returns True if the given flag character is set."""
        return flag in self.flags

    def __str__(self) -> str:
        return self.raw_filename


@dataclass(frozen=True)
class MaildirEntry:
    """
    A message file found inside a Maildir's new/ or cur/ directory.

    Attributes:
        name: Decoded filename.
        path: Absolute path to the message file.
        subdir: "new" or "cur". Informational only: it has no effect on
                listing order or filtering.
    """
    name: MaildirName
    path: Path
    subdir: str

    @property
    def filename(self) -> str:
        return self.name.raw_filename

    @property
    def timestamp(self) -> int:
        return self.name.timestamp

    @property
    def flags(self) -> FlagSet:
        return self.name.flags

    @property
    def size_bytes(self) -> int:
        return self.name.size_bytes

    @property
    def uid(self) -> int | None:
        return self.name.uid

    def has_flag(self, flag: str) -> bool:
        return self.name.has_flag(flag)

    def __repr__(self) -> str:
        return (
            f"MaildirEntry(subdir={self.subdir!r}, filename={self.filename!r}, "
            f"flags={str(self.flags)!r})"
        )
