# =============================================================================
# Maildir Filename Codec
# =============================================================================
# Encodes new, collision-resistant filenames and decodes existing ones.
#
# Encoder output (always the "full" grammar):
#
#   <unix_ts>.<clock_ms>_<pid>.<host>,S=<size>:2,<sorted_flags>
#
# Decoding accepts any grammar in codec.grammars. After the grammar match
# the remainder is split into an info segment and a flags segment:
#   1. a literal ":2," is the split point if present
#   2. otherwise the last comma separates info (before) from flags (after)
#   3. otherwise the whole remainder is info and there are no flags
# "S=<digits>" and "U=<digits>" tokens are then picked out of the info
# segment independently, in any order, alongside tokens we don't interpret.
#
# The codec never touches the filesystem. If a generated name already
# exists on disk, retrying is the caller's job.
# =============================================================================

import os
import re
import socket
import threading
import time
from collections.abc import Iterable

from maildir_engine.codec.grammars import GRAMMARS, Grammar, match_filename
from maildir_engine.core import FALLBACK_HOST, FlagSet, MaildirName


# Marker between the info segment and the flags ("experimental semantics" v2)
INFO_MARKER = ":2,"

# Info tokens are separated by commas; S= and U= may appear anywhere
_SIZE_TOKEN = re.compile(r"(?<![^,])S=([0-9]+)")
_UID_TOKEN = re.compile(r"(?<![^,])U=([0-9]+)")

# Characters that cannot appear raw in the host segment
_HOST_ESCAPES = {
    "/": r"\057",
    ":": r"\072",
    ",": r"\054",
}

# Guards the process-local clock so every name gets a strictly larger value
_clock_lock = threading.Lock()
_last_clock_ms = 0


# =============================================================================
# Encoding
# =============================================================================

def local_hostname() -> str:
    """
    Returns the local hostname, escaped for use inside a filename.

    Falls back to FALLBACK_HOST if the hostname can't be determined.
    """
    try:
        hostname = socket.gethostname()
    except OSError:
        hostname = ""
    return escape_host(hostname or FALLBACK_HOST)


def escape_host(hostname: str) -> str:
    """Escape characters that would break the filename grammar."""
    for char, escaped in _HOST_ESCAPES.items():
        hostname = hostname.replace(char, escaped)
    return hostname


def _next_clock_ms() -> int:
    """
    Monotonic millisecond counter, strictly increasing within this process.

    Two calls in the same millisecond get consecutive values; combined with
    the pid this keeps names from one process and its siblings distinct.
    """
    global _last_clock_ms
    with _clock_lock:
        now_ms = time.monotonic_ns() // 1_000_000
        if now_ms <= _last_clock_ms:
            now_ms = _last_clock_ms + 1
        _last_clock_ms = now_ms
        return now_ms


def format_flags(flags: Iterable[str]) -> str:
    """Canonical flag string: de-duplicated and sorted by character code."""
    return str(flags if isinstance(flags, FlagSet) else FlagSet(flags))


def format_filename(
    timestamp: int,
    unique_token: str,
    host: str,
    flags: Iterable[str] = (),
    info: str = "S=0",
) -> str:
    """
    Serialize filename components into the full grammar.

    Args:
        timestamp: Seconds since the epoch.
        unique_token: Uniqueness key, used verbatim.
        host: Host segment, used verbatim (escape it first if needed).
        flags: Flag characters; written in canonical order.
        info: Info segment (comma-separated tokens). Omitted when empty.

    Returns:
        The filename.
    """
    head = f"{timestamp}.{unique_token}.{host}"
    if info:
        head = f"{head},{info}"
    return f"{head}{INFO_MARKER}{format_flags(flags)}"


def generate_filename(flags: Iterable[str] = (), *, host: str | None = None) -> str:
    """
    Generate a new, unique Maildir filename.

    The size is always written as S=0 because the content hasn't been
    written yet; the size reconciler corrects it afterwards.

    Args:
        flags: Flag characters for the new message (e.g. {"D"} for a draft).
        host: Host segment override. Defaults to the local hostname.

    Returns:
        A filename such as "1700000000.81234567_4242.myhost,S=0:2,D".

    Example:
        >>> name = generate_filename({"D"})
        >>> parse_filename(name).flags == {"D"}
        True
    """
    token = f"{_next_clock_ms()}_{os.getpid()}"
    host = escape_host(host) if host else local_hostname()
    return format_filename(int(time.time()), token, host, flags, info="S=0")


# =============================================================================
# Decoding
# =============================================================================

def split_info_flags(remainder: str) -> tuple[str, str]:
    """
    Split the text after the host into (info, flags).

    Examples:
        "S=1024:2,RS" -> ("S=1024", "RS")
        ":2,D"        -> ("", "D")
        "U=1,S"       -> ("U=1", "S")
        "S=10"        -> ("S=10", "")
    """
    marker = remainder.rfind(INFO_MARKER)
    if marker >= 0:
        return remainder[:marker], remainder[marker + len(INFO_MARKER):]

    comma = remainder.rfind(",")
    if comma >= 0:
        return remainder[:comma], remainder[comma + 1:]

    return remainder, ""


def parse_info(info: str) -> tuple[int, int | None]:
    """
    Extract (size, uid) from an info segment.

    Size defaults to 0 and uid to None when the token is missing.
    """
    size_match = _SIZE_TOKEN.search(info)
    uid_match = _UID_TOKEN.search(info)
    size = int(size_match.group(1)) if size_match else 0
    uid = int(uid_match.group(1)) if uid_match else None
    return size, uid


def parse_filename(
    filename: str, grammars: tuple[Grammar, ...] = GRAMMARS
) -> MaildirName | None:
    """
    Decode a Maildir filename.

    Args:
        filename: Bare filename (no directory part).
        grammars: Grammar table, tried in order. Defaults to GRAMMARS.

    Returns:
        The decoded MaildirName, or None if this isn't a Maildir-style
        name (e.g. "README.md"). None is not an error: listings skip such
        entries.
    """
    match = match_filename(filename, grammars)
    if match is None:
        return None

    info, flag_text = split_info_flags(match.remainder)
    size, uid = parse_info(info)

    return MaildirName(
        timestamp=match.timestamp,
        unique_token=match.unique_token,
        host=match.host or FALLBACK_HOST,
        size_bytes=size,
        uid=uid,
        flags=FlagSet.parse(flag_text),
        raw_filename=filename,
        info=info,
        grammar=match.grammar,
    )


# =============================================================================
# Re-encoding
# =============================================================================

def with_size(name: MaildirName, size: int) -> str:
    """
    Re-encode a decoded name with a corrected size.

    Timestamp, unique token, host and flags are kept. The S= token is
    replaced where it stands, or appended if the name had none. Every
    other info token (such as a synchronizer's U=<uid>) is carried over.

    Args:
        name: Decoded filename.
        size: Actual size in bytes.

    Returns:
        The new filename (always in the full grammar).
    """
    if size < 0:
        raise ValueError(f"size must be >= 0, got {size}")

    tokens = [token for token in name.info.split(",") if token]
    size_token = f"S={size}"
    for index, token in enumerate(tokens):
        if _SIZE_TOKEN.fullmatch(token):
            tokens[index] = size_token
            break
    else:
        tokens.append(size_token)

    return format_filename(
        name.timestamp,
        name.unique_token,
        name.host,
        name.flags,
        info=",".join(tokens),
    )
