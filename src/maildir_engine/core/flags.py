# =============================================================================
# Maildir Flags
# =============================================================================
# Maildir stores message state as single characters after the ":2," marker
# at the end of a filename, e.g. "1700000000.123_456.host,S=42:2,FS".
#
# The engine treats every flag character as opaque. The constants below are
# the conventional meanings used by mail clients and synchronizers; callers
# may rely on them, the storage engine never does.
#
# Canonical form: de-duplicated, sorted by character code, no separator.
# =============================================================================

from collections.abc import Iterable, Iterator, Set


# Conventional flag characters (caller-level convention only)
DRAFT = "D"         # Message is a draft
FLAGGED = "F"       # User-flagged / starred
PASSED = "P"        # Resent / forwarded / bounced
REPLIED = "R"       # Replied to
SEEN = "S"          # Read
TRASHED = "T"       # Marked for deletion

# Characters that can't live at the end of a filename
_FORBIDDEN = frozenset({"/", "\0"})


class FlagSet(Set):
    """
    Immutable ordered set of single-character Maildir flags.

    Membership tests ignore order; iteration and str() always yield the
    canonical ordering (ascending by code point), which is what ends up
    in a filename.

    Usage:
        >>> flags = FlagSet("SD")
        >>> "D" in flags
        True
        >>> str(flags)
        'DS'
        >>> str(flags.with_flags("F"))
        'DFS'
    """

    __slots__ = ("_flags",)

    def __init__(self, flags: Iterable[str] = ()) -> None:
        members = frozenset(flags)
        for flag in members:
            if not isinstance(flag, str) or len(flag) != 1:
                raise ValueError(f"Maildir flags must be single characters, got {flag!r}")
            if flag in _FORBIDDEN:
                raise ValueError(f"Maildir flags can't be '/' or NUL, got {flag!r}")
        self._flags = members

    @classmethod
    def parse(cls, text: str) -> "FlagSet":
        """Build a FlagSet from the flags segment of a filename."""
        return cls(text)

    @classmethod
    def _from_iterable(cls, it: Iterable[str]) -> "FlagSet":
        # Used by the Set mixin for &, |, - and ^
        return cls(it)

    def __contains__(self, flag: object) -> bool:
        return flag in self._flags

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._flags))

    def __len__(self) -> int:
        return len(self._flags)

    def __hash__(self) -> int:
        return hash(self._flags)

    def with_flags(self, *flags: str) -> "FlagSet":
        """Return a new FlagSet with the given flags added."""
        return FlagSet(self._flags.union(flags))

    def without_flags(self, *flags: str) -> "FlagSet":
        """Return a new FlagSet with the given flags removed."""
        return FlagSet(self._flags.difference(flags))

    def __str__(self) -> str:
        return "".join(self)

    def __repr__(self) -> str:
        return f"FlagSet({str(self)!r})"
