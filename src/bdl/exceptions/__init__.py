"""
BDL exception classes.

This package provides all exception types raised while parsing and validating
dialog documents.
"""

from bdl.exceptions.core import (
    BDLError,
    DependencyError,
    DependencyIssue,
    ErrorContext,
    NodeError,
    ParseError,
    VariableError,
)

__all__ = [
    "BDLError",
    "DependencyError",
    "DependencyIssue",
    "ErrorContext",
    "NodeError",
    "ParseError",
    "VariableError",
]
