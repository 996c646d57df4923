"""
Document parser for the Branching Dialog Language.

This module runs the full pipeline over one in-memory text: metadata,
variable blocks, dependency validation, nodes, and assembly into a Document.
"""

from bdl.config import DEFAULT_CONFIG, ParserConfig
from bdl.core.document import Document, Metadata, Node
from bdl.core.types import DependencySet, VariableScopes
from bdl.parsing.dependencies import validate_dependencies, validate_file_transfer
from bdl.parsing.metadata import parse_metadata
from bdl.parsing.nodes import parse_nodes
from bdl.parsing.variables import parse_variables


class DialogParser:
    """Parser for a single dialog document held in memory."""

    def __init__(self, content: str, config: ParserConfig | None = None):
        self.content = content
        self.config = config or DEFAULT_CONFIG

    def parse_metadata(self) -> Metadata:
        return parse_metadata(self.content)

    def parse_variables(self) -> VariableScopes:
        return parse_variables(self.content)

    def validate_dependencies(self, declared: list[str]) -> DependencySet:
        return validate_dependencies(declared, self.config)

    def validate_file_transfer(self, file: str, dependencies: DependencySet) -> None:
        validate_file_transfer(file, dependencies, self.config)

    def parse_nodes(self, dependencies: DependencySet) -> dict[str, Node]:
        return parse_nodes(self.content, dependencies, self.config)

    def parse(self) -> Document:
        """
        Parse the content into a Document.

        Returns:
            The assembled Document

        Raises:
            ParseError: If metadata, variables, options or markers are malformed
            DependencyError: If declared or referenced dependencies are invalid
            NodeError: If a node name is declared twice
        """
        metadata = self.parse_metadata()
        global_vars, local_vars = self.parse_variables()
        dependencies = self.validate_dependencies(metadata.required or [])
        nodes = self.parse_nodes(dependencies)

        document = Document(
            metadata=metadata, global_vars=global_vars, local_vars=local_vars
        )
        for node in nodes.values():
            document.add_node(node)
        return document


def parse_document(content: str, config: ParserConfig | None = None) -> Document:
    """
    Convenience function to parse document text.

    Params:
        content: Full document text
        config: Parser settings

    Returns:
        The assembled Document

    Raises:
        ParseError: If metadata, variables, options or markers are malformed
        DependencyError: If declared or referenced dependencies are invalid
        NodeError: If a node name is declared twice
    """
    parser = DialogParser(content, config)
    return parser.parse()
