"""
Core BDL document model.

This package provides the value variants, the document records and the type
aliases shared across the parser and loader.
"""

from bdl.core.document import (
    BranchOption,
    Condition,
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
from bdl.core.types import DependencySet, VariableMap, VariableScopes
from bdl.core.values import (
    BooleanValue,
    EmptyValue,
    NumberValue,
    StringValue,
    Value,
)

__all__ = [
    "BooleanValue",
    "BranchOption",
    "Condition",
    "ContentElement",
    "DependencySet",
    "Destination",
    "Document",
    "EmptyValue",
    "ExitDestination",
    "FileTransferDestination",
    "FunctionCallContent",
    "Metadata",
    "Node",
    "NodeDestination",
    "NumberValue",
    "StringValue",
    "TextContent",
    "Value",
    "VariableContent",
    "VariableMap",
    "VariableScopes",
]
