# =============================================================================
# Maildir Filename Grammars
# =============================================================================
# There is no single canonical Maildir filename. Producers we have to read:
#
#   full:       1752088678.388349_6.nandi,U=1:2,S        (mbsync and friends)
#               1234567890.123_456.hostname,S=1024:2,RS  (our own encoder)
#   three-part: 1234567890.M20P3Q1.host.example.com:2,S  (classic Maildir)
#   two-part:   1700000000.abc123:2,D                    (legacy writers)
#
# Each grammar is a row of data: a name and an anchored pattern with the
# same named groups. They are tried in order, most specific first, and the
# first match wins. Adding a legacy form means adding a row to GRAMMARS.
#
# Named groups:
#   timestamp  leading decimal digits (required)
#   token      uniqueness key (required)
#   host       delivering host (optional - missing means FALLBACK_HOST)
#   rest       everything after the host: info and flags, unsplit
# =============================================================================

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class GrammarMatch:
    """
    Structured result of a successful grammar match.

    The remainder is not split into info and flags here; that rule is the
    same for every grammar and lives in the codec.
    """
    grammar: str
    timestamp: int
    unique_token: str
    host: str | None
    remainder: str


@dataclass(frozen=True)
class Grammar:
    """A named filename grammar backed by an anchored regular expression."""
    name: str
    pattern: re.Pattern[str]

    def match(self, filename: str) -> GrammarMatch | None:
        """Match the whole filename, or return None."""
        m = self.pattern.fullmatch(filename)
        if m is None:
            return None
        groups = m.groupdict()
        return GrammarMatch(
            grammar=self.name,
            timestamp=int(groups["timestamp"]),
            unique_token=groups["token"],
            host=groups.get("host"),
            remainder=groups["rest"],
        )


# Compound "<clock>_<suffix>" key, host, then a mandatory ",<info>" tail.
# The host stops at ":" so "<token>_<x>.host:2,S" falls through to THREE_PART
FULL = Grammar(
    name="full",
    pattern=re.compile(
        r"(?P<timestamp>[0-9]+)\.(?P<token>[^_]+_[^.]+)\.(?P<host>[^,:]+),(?P<rest>.+)",
        re.DOTALL,
    ),
)

# Single token and host; the ":2,<flags>" suffix is optional
THREE_PART = Grammar(
    name="three-part",
    pattern=re.compile(
        r"(?P<timestamp>[0-9]+)\.(?P<token>[^.]+)\.(?P<host>[^:,]+)(?P<rest>.*)",
        re.DOTALL,
    ),
)

# No host segment at all
TWO_PART = Grammar(
    name="two-part",
    pattern=re.compile(
        r"(?P<timestamp>[0-9]+)\.(?P<token>[^:,]+)(?P<rest>.*)",
        re.DOTALL,
    ),
)

# Order matters: most specific first
GRAMMARS: tuple[Grammar, ...] = (FULL, THREE_PART, TWO_PART)


def match_filename(
    filename: str, grammars: tuple[Grammar, ...] = GRAMMARS
) -> GrammarMatch | None:
    """
    Try each grammar in order and return the first match.

    Args:
        filename: Bare filename (no directory part).
        grammars: Grammar table to use. Defaults to GRAMMARS.

    Returns:
        The first GrammarMatch, or None if no grammar accepts the name.
    """
    for grammar in grammars:
        result = grammar.match(filename)
        if result is not None:
            return result
    return None
