"""
BDL parsing components.

This package provides line classification, metadata and variable block
parsing, dependency validation, node parsing and full document parsing.
"""

from bdl.parsing.dependencies import (
    validate_dependencies,
    validate_dependency_file,
    validate_file_transfer,
)
from bdl.parsing.lines import LineKind, ParseState, classify_line
from bdl.parsing.metadata import parse_metadata
from bdl.parsing.nodes import NodeParser, parse_nodes
from bdl.parsing.parser import DialogParser, parse_document
from bdl.parsing.variables import parse_value, parse_variable_line, parse_variables

__all__ = [
    "DialogParser",
    "LineKind",
    "NodeParser",
    "ParseState",
    "classify_line",
    "parse_document",
    "parse_metadata",
    "parse_nodes",
    "parse_value",
    "parse_variable_line",
    "parse_variables",
    "validate_dependencies",
    "validate_dependency_file",
    "validate_file_transfer",
]
