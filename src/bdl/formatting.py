"""
Serialization of documents back into dialog language text.

The output of ``format_document`` parses back into an equal Document as long
as text content does not itself begin lines with ``#``, ``@``, ``{`` or
``?{``. Adjacent text elements are written as separate paragraphs.
"""

from bdl.core.document import (
    BranchOption,
    ContentElement,
    Destination,
    Document,
    ExitDestination,
    FileTransferDestination,
    FunctionCallContent,
    Metadata,
    Node,
    NodeDestination,
    TextContent,
    VariableContent,
)
from bdl.core.types import VariableMap
from bdl.core.values import StringValue, Value
from bdl.parsing.lines import GLOBAL_BLOCK_OPENER, LOCAL_BLOCK_OPENER
from bdl.parsing.nodes import EXIT_KEYWORD

INDENT = "    "

_METADATA_FIELDS = ("topic", "description", "author", "version")


def format_value(value: Value) -> str:
    if isinstance(value, StringValue):
        return f'"{value.value}"'
    return str(value)


def format_metadata(metadata: Metadata) -> str:
    """
    Write the metadata header.

    Params:
        metadata: Header fields to write

    Returns:
        ``# Key: value`` lines for every field that is set
    """
    lines = []
    for field_name in _METADATA_FIELDS:
        value = getattr(metadata, field_name)
        if value is not None:
            lines.append(f"# {field_name.capitalize()}: {value}")
    if metadata.required:
        lines.append(f"# Required: {', '.join(metadata.required)}")
    return "\n".join(lines)


def format_variables(opener: str, variables: VariableMap) -> str:
    if not variables:
        return f"{opener} {{}}"

    entries = [f"{INDENT}{key}: {format_value(value)}" for key, value in variables.items()]
    body = ",\n".join(entries)
    return f"{opener} {{\n{body}\n}}"


def format_content(content: list[ContentElement]) -> str:
    parts = []
    previous = None
    for element in content:
        if isinstance(element, TextContent):
            if isinstance(previous, TextContent):
                parts.append("\n\n")
            parts.append(element.text)
        elif isinstance(element, VariableContent):
            parts.append(f"${{{element.name}}}")
        elif isinstance(element, FunctionCallContent):
            if element.result_vars:
                parts.append(
                    f"!{{{element.name} -> {', '.join(element.result_vars)}}}"
                )
            else:
                parts.append(f"!{{{element.name}}}")
        previous = element
    return "".join(parts)


def format_destination(destination: Destination) -> str:
    if isinstance(destination, NodeDestination):
        return f"@{destination.node}"
    if isinstance(destination, FileTransferDestination):
        return f"[{destination.file}:{destination.node}]"
    if isinstance(destination, ExitDestination):
        return EXIT_KEYWORD
    raise TypeError(f"Unknown destination type: {type(destination).__name__}")


def format_option(option: BranchOption) -> str:
    body = f"{{{'|'.join(option.keywords)}: {format_destination(option.destination)}}}"
    if option.condition is not None:
        return f"?{{{option.condition.variable}}}{body}"
    return body


def format_node(node: Node) -> str:
    lines = [f"@{node.name}"]
    content = format_content(node.content)
    if content:
        lines.append(content)
    lines.extend(format_option(option) for option in node.options)
    return "\n".join(lines)


def format_document(document: Document) -> str:
    """
    Write a whole document as dialog language text.

    Params:
        document: Document to serialize

    Returns:
        Source text ending with a newline
    """
    sections = []

    header = format_metadata(document.metadata)
    if header:
        sections.append(header)
    if document.global_vars is not None:
        sections.append(format_variables(GLOBAL_BLOCK_OPENER, document.global_vars))
    if document.local_vars:
        sections.append(format_variables(LOCAL_BLOCK_OPENER, document.local_vars))
    sections.extend(format_node(node) for node in document.nodes.values())

    return "\n\n".join(sections) + "\n"
