# =============================================================================
# Filename Codec Module
# =============================================================================
# Maildir keeps message identity, size and flags in the filename. This
# module turns filenames into MaildirName objects and back:
#   - generate_filename: new collision-resistant names
#   - parse_filename: decode any supported grammar (or None)
#   - with_size: re-encode a name with a corrected S= size
#
# Pure string handling - no filesystem access.
# =============================================================================

from maildir_engine.codec.filename import (
    INFO_MARKER,
    escape_host,
    format_filename,
    format_flags,
    generate_filename,
    local_hostname,
    parse_filename,
    parse_info,
    split_info_flags,
    with_size,
)
from maildir_engine.codec.grammars import (
    GRAMMARS,
    Grammar,
    GrammarMatch,
    match_filename,
)

__all__ = [
    # Encoding
    "generate_filename",
    "format_filename",
    "format_flags",
    "escape_host",
    "local_hostname",
    "with_size",
    # Decoding
    "parse_filename",
    "parse_info",
    "split_info_flags",
    "INFO_MARKER",
    # Grammars
    "GRAMMARS",
    "Grammar",
    "GrammarMatch",
    "match_filename",
]
