# =============================================================================
# Header Reader
# =============================================================================
# Reads only the header block of a message file: everything up to the first
# empty line. The body is never read, so this is cheap even for messages
# with large attachments.
#
# Folded headers (continuation lines starting with whitespace) are joined
# onto the previous header with a single space. A line that is neither a
# "Name: value" header nor a continuation ends the header block early;
# malformed trailing content is ignored rather than rejected.
#
# No MIME decoding happens here (no RFC 2047 encoded-words, no charsets).
# =============================================================================

import logging
import re
from os import PathLike
from pathlib import Path

logger = logging.getLogger(__name__)


# "Name: value" - the name is anything up to the first colon
_HEADER_LINE = re.compile(r"([^:]+):\s*(.*)", re.DOTALL)


def read_headers(path: str | PathLike[str]) -> dict[str, str] | None:
    """
    Read the header block of a message file.

    Args:
        path: Path to the message file.

    Returns:
        Mapping of lower-cased header name to value, or None if the file
        couldn't be opened or read. When a header repeats, the last
        occurrence wins.

    Example:
        >>> headers = read_headers(entry.path)
        >>> headers["subject"]
        'Quarterly report'
    """
    headers: dict[str, str] = {}
    current_name: str | None = None
    current_value = ""

    try:
        with open(Path(path), encoding="utf-8", errors="replace") as f:
            for raw_line in f:
                line = raw_line.rstrip("\r\n")

                # Empty line separates headers from the body
                if line == "":
                    break

                # Continuation of a folded header
                if line[0].isspace() and current_name is not None:
                    current_value = f"{current_value} {line.lstrip()}"
                    continue

                if current_name is not None:
                    headers[current_name.lower()] = current_value

                match = _HEADER_LINE.fullmatch(line)
                if match is None:
                    # Not a header - treat as the end of the header block
                    current_name = None
                    break

                current_name, current_value = match.group(1), match.group(2)
    except OSError as e:
        logger.debug(f"Could not read headers from {path}: {e}")
        return None

    if current_name is not None:
        headers[current_name.lower()] = current_value

    return headers
