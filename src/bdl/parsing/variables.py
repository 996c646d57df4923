"""
Variable block parsing.

Two block kinds exist: ``$global_vars:`` (at most once per document) and
``$local_vars:`` (any number, merged with last write winning). Each block is
closed by a line holding only ``}``. Every line inside a block is one
``key: value`` declaration with an optional trailing comma.
"""

import math
import re

from bdl.core.types import VariableMap, VariableScopes
from bdl.core.values import BooleanValue, EmptyValue, NumberValue, StringValue, Value
from bdl.exceptions import ErrorContext, ParseError
from bdl.parsing.lines import (
    GLOBAL_BLOCK_OPENER,
    LOCAL_BLOCK_OPENER,
    LineKind,
    ParseState,
    classify_line,
    is_block_close,
    is_block_opener,
    is_comment_line,
)

# Decimal float literal; no NaN, Infinity, hex or digit separators
NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

EMPTY_LITERAL = "{}"


def parse_value(value_str: str) -> Value:
    """
    Coerce a declared value into its variant.

    Precedence: quoted string, boolean literal, number, empty.

    Params:
        value_str: The text after the colon of a declaration

    Returns:
        The parsed Value

    Raises:
        ParseError: If the text matches none of the value forms
    """
    value = value_str.strip()
    if value.endswith(","):
        value = value[:-1]
    value = value.strip()

    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return StringValue(value=value[1:-1])
    if value == "true":
        return BooleanValue(value=True)
    if value == "false":
        return BooleanValue(value=False)
    if NUMBER_PATTERN.match(value):
        number = float(value)
        if not math.isfinite(number):
            raise ParseError(f"Invalid value format: {value}")
        return NumberValue(value=number)
    if value == "" or value == EMPTY_LITERAL:
        return EmptyValue()

    raise ParseError(f"Invalid value format: {value}")


def parse_variable_line(
    line: str, line_number: int | None = None
) -> tuple[str, Value] | None:
    """
    Parse one declaration line from inside a variable block.

    Params:
        line: Raw source line
        line_number: 1-based position of the line, used in error context

    Returns:
        (key, value) pair, or None for blank and closing-brace lines

    Raises:
        ParseError: If the line is not a well-formed declaration
    """
    stripped = line.strip()
    if not stripped or stripped == "}":
        return None

    context = ErrorContext(line_number=line_number, line_text=line)

    if stripped.count(":") != 1:
        raise ParseError("Invalid variable declaration", context)

    key, raw_value = stripped.split(":", 1)
    key = key.strip()
    if not key:
        raise ParseError("Invalid variable declaration: missing name", context)

    try:
        value = parse_value(raw_value)
    except ParseError as e:
        raise ParseError(e.message, context) from e

    return key, value


def open_block(line: str, line_number: int | None = None) -> tuple[ParseState, bool]:
    """
    Interpret a block opener line.

    Params:
        line: A line starting with ``$global_vars:`` or ``$local_vars:``
        line_number: 1-based position of the line, used in error context

    Returns:
        The block state entered and whether the block already closed on the
        same line (``$local_vars: {}``)

    Raises:
        ParseError: If anything other than ``{`` or ``{}`` follows the colon
    """
    stripped = line.strip()
    if stripped.startswith(GLOBAL_BLOCK_OPENER):
        state, rest = ParseState.IN_GLOBAL_BLOCK, stripped[len(GLOBAL_BLOCK_OPENER) :]
    else:
        state, rest = ParseState.IN_LOCAL_BLOCK, stripped[len(LOCAL_BLOCK_OPENER) :]

    rest = rest.strip()
    if rest in ("", "{"):
        return state, False
    if rest == EMPTY_LITERAL:
        return state, True

    raise ParseError(
        "Unexpected content after variable block opener",
        ErrorContext(line_number=line_number, line_text=line),
    )


def parse_variables(text: str) -> VariableScopes:
    """
    Collect global and local variable declarations from document text.

    Params:
        text: Full document text

    Returns:
        (global mapping or None if no global block exists, local mapping)

    Raises:
        ParseError: On a duplicate global block, a nested or unclosed block,
            or a malformed declaration line
    """
    global_vars: VariableMap | None = None
    local_vars: VariableMap = {}
    current_block: VariableMap | None = None
    opened_at: tuple[int, str] | None = None

    for index, line in enumerate(text.splitlines()):
        line_number = index + 1

        if current_block is None:
            if not is_block_opener(line):
                continue

            state, closed = open_block(line, line_number)
            if state == ParseState.IN_GLOBAL_BLOCK:
                if global_vars is not None:
                    raise ParseError(
                        "Duplicate global variables declaration",
                        ErrorContext(line_number=line_number, line_text=line),
                    )
                global_vars = {}
                current_block = global_vars
            else:
                current_block = local_vars

            if closed:
                current_block = None
            else:
                opened_at = (line_number, line)
            continue

        if is_block_close(line):
            current_block = None
            opened_at = None
            continue
        if classify_line(line) == LineKind.BLANK or is_comment_line(line):
            continue
        if is_block_opener(line):
            raise ParseError(
                "Nested variable block",
                ErrorContext(line_number=line_number, line_text=line),
            )

        entry = parse_variable_line(line, line_number)
        if entry is not None:
            key, value = entry
            current_block[key] = value

    if current_block is not None:
        line_number, line = opened_at
        raise ParseError(
            "Unclosed variable block",
            ErrorContext(line_number=line_number, line_text=line),
        )

    return global_vars, local_vars
