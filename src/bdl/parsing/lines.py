"""
Line classification for the dialog language.

The grammar is line oriented: every trimmed line is exactly one of a blank,
a comment, a metadata header entry, a variable block delimiter, a node
header, an option or plain content. These helpers are stateless; whether a
comment counts as metadata also depends on its position, which the metadata
parser tracks.
"""

from enum import Enum

COMMENT_MARKER = "#"
NODE_MARKER = "@"
GLOBAL_BLOCK_OPENER = "$global_vars:"
LOCAL_BLOCK_OPENER = "$local_vars:"
BLOCK_CLOSE = "}"
OPTION_MARKER = "{"
CONDITIONAL_OPTION_MARKER = "?{"

METADATA_KEYS = frozenset({"topic", "description", "author", "version", "required"})


class LineKind(Enum):
    """Syntactic category of a single trimmed line."""

    BLANK = "blank"
    COMMENT = "comment"
    METADATA = "metadata"
    GLOBAL_BLOCK_OPEN = "global_block_open"
    LOCAL_BLOCK_OPEN = "local_block_open"
    BLOCK_CLOSE = "block_close"
    NODE_HEADER = "node_header"
    OPTION = "option"
    CONTENT = "content"


class ParseState(Enum):
    """Where a line scan currently is."""

    NONE = "none"
    IN_GLOBAL_BLOCK = "in_global_block"
    IN_LOCAL_BLOCK = "in_local_block"
    IN_NODE = "in_node"


def is_comment_line(line: str) -> bool:
    return line.strip().startswith(COMMENT_MARKER)


def split_metadata_line(line: str) -> tuple[str, str] | None:
    """
    Split a ``# key: value`` comment into a lowercase key and trimmed value.

    Params:
        line: A raw or trimmed source line

    Returns:
        (key, value) pair, or None if the line is not a comment with a colon
    """
    stripped = line.strip()
    if not stripped.startswith(COMMENT_MARKER):
        return None

    body = stripped[len(COMMENT_MARKER) :]
    if ":" not in body:
        return None

    key, value = body.split(":", 1)
    return key.strip().lower(), value.strip()


def is_metadata_line(line: str) -> bool:
    """Check whether a comment line carries one of the recognized header keys."""
    parts = split_metadata_line(line)
    return parts is not None and parts[0] in METADATA_KEYS


def is_block_opener(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(GLOBAL_BLOCK_OPENER) or stripped.startswith(
        LOCAL_BLOCK_OPENER
    )


def is_block_close(line: str) -> bool:
    return line.strip() == BLOCK_CLOSE


def is_node_header(line: str) -> bool:
    return line.strip().startswith(NODE_MARKER)


def is_option_line(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(OPTION_MARKER) or stripped.startswith(
        CONDITIONAL_OPTION_MARKER
    )


def classify_line(line: str) -> LineKind:
    """
    Classify one line without regard to surrounding context.

    Params:
        line: A raw source line; surrounding whitespace is ignored

    Returns:
        The LineKind of the trimmed line
    """
    stripped = line.strip()

    if not stripped:
        return LineKind.BLANK
    if stripped.startswith(COMMENT_MARKER):
        return LineKind.METADATA if is_metadata_line(stripped) else LineKind.COMMENT
    if stripped.startswith(GLOBAL_BLOCK_OPENER):
        return LineKind.GLOBAL_BLOCK_OPEN
    if stripped.startswith(LOCAL_BLOCK_OPENER):
        return LineKind.LOCAL_BLOCK_OPEN
    if stripped == BLOCK_CLOSE:
        return LineKind.BLOCK_CLOSE
    if stripped.startswith(NODE_MARKER):
        return LineKind.NODE_HEADER
    if is_option_line(stripped):
        return LineKind.OPTION
    return LineKind.CONTENT
