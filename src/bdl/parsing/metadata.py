"""
Metadata header parsing.

The header is the leading run of ``#`` lines. Blank lines inside the run are
allowed; the first non-blank line that is not a comment ends it, so a later
``# Topic: ...`` line is an ordinary comment.
"""

from bdl.core.document import Metadata
from bdl.parsing.lines import COMMENT_MARKER, split_metadata_line


def parse_required(value: str) -> list[str]:
    """Split a ``Required`` value on commas, keeping empty segments."""
    return [segment.strip() for segment in value.split(",")]


def parse_metadata(text: str) -> Metadata:
    """
    Extract the metadata header from document text.

    Unknown keys and comments without a colon are ignored. A repeated key
    keeps its last value.

    Params:
        text: Full document text

    Returns:
        Metadata with every recognized field found in the header
    """
    fields: dict[str, str | list[str]] = {}

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if not stripped.startswith(COMMENT_MARKER):
            break

        parts = split_metadata_line(stripped)
        if parts is None:
            continue

        key, value = parts
        if key == "required":
            fields["required"] = parse_required(value)
        elif key in ("topic", "description", "author", "version"):
            fields[key] = value

    return Metadata(**fields)
