"""
Exception classes for BDL document processing.

This module defines specific exception types for the error conditions that
can occur while parsing and validating dialog documents. Every parsing
operation either returns a value or raises exactly one of these.
"""

from dataclasses import dataclass
from enum import Enum


class DependencyIssue(Enum):
    """Reason a dependency check failed."""

    EXTENSION = "extension"
    DUPLICATE = "duplicate"
    UNDECLARED = "undeclared"


@dataclass
class ErrorContext:
    """
    Location information for error messages.

    Params:
        line_number: 1-based line number within the source text
        line_text: The raw text of the offending line
        file_name: Name of the file being parsed, when known
    """

    line_number: int | None = None
    line_text: str | None = None
    file_name: str | None = None

    def format_location(self) -> str:
        """
        Format location information for display below the primary message.

        Returns:
            Indented multi-line location string, empty if nothing is known
        """
        lines = []

        if self.file_name and self.line_number is not None:
            lines.append(f"  at {self.file_name}:{self.line_number}")
        elif self.file_name:
            lines.append(f"  in {self.file_name}")
        elif self.line_number is not None:
            lines.append(f"  at line {self.line_number}")

        if self.line_text is not None:
            lines.append(f"  line: {self.line_text}")

        return "\n".join(lines)


class BDLError(Exception):
    """Base exception for all BDL-related errors."""

    pass


class ParseError(BDLError):
    """Raised when document text is malformed."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        """
        Initialize the exception.

        Params:
            message: Description of what could not be parsed
            context: Optional location of the offending line
        """
        self.message = message
        self.context = context

        location_info = context.format_location() if context else ""
        full_message = f"{message}\n{location_info}" if location_info else message

        super().__init__(full_message)

    @property
    def line(self) -> str | None:
        """Raw text of the offending line, if known."""
        return self.context.line_text if self.context else None


class VariableError(BDLError):
    """Raised when a variable scope rule is violated."""

    def __init__(self, message: str):
        """
        Initialize the exception.

        Params:
            message: Error message describing the scope violation
        """
        super().__init__(message)


class NodeError(BDLError):
    """Raised when a node name collides with an existing node."""

    def __init__(self, node_name: str, message: str = "already exists"):
        """
        Initialize the exception.

        Params:
            node_name: The conflicting node name
            message: Specific error message
        """
        self.node_name = node_name
        super().__init__(f"Node '{node_name}' {message}")


class DependencyError(BDLError):
    """Raised when a declared or referenced dependency file is invalid."""

    _MESSAGES = {
        DependencyIssue.EXTENSION: "Invalid dependency file extension",
        DependencyIssue.DUPLICATE: "Duplicate dependency",
        DependencyIssue.UNDECLARED: "Undeclared dependency",
    }

    def __init__(self, file: str, reason: DependencyIssue):
        """
        Initialize the exception.

        Params:
            file: The dependency file name that failed validation
            reason: Which rule the file name broke
        """
        self.file = file
        self.reason = reason
        super().__init__(f"{self._MESSAGES[reason]}: '{file}'")
