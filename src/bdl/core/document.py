"""
Document model for parsed BDL files.

This module contains the records produced by the parser: metadata, node
content elements, branch options with their destinations and conditions,
nodes and the document that owns them. Content elements and destinations are
closed variant sets discriminated by ``kind``.
"""

from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from bdl.core.types import VariableMap
from bdl.exceptions import NodeError

if TYPE_CHECKING:
    from bdl.config import ParserConfig
    from bdl.core.types import DependencySet


class Metadata(BaseModel):
    """Header fields taken from the leading ``# Key: value`` comment lines."""

    model_config = ConfigDict(frozen=True)

    topic: str | None = None
    description: str | None = None
    author: str | None = None
    version: str | None = None
    required: list[str] | None = None  # Declaration order, not deduplicated


class TextContent(BaseModel):
    """Literal text, possibly spanning several source lines."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class VariableContent(BaseModel):
    """Variable interpolation marker: ``${name}``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["variable"] = "variable"
    name: str


class FunctionCallContent(BaseModel):
    """Function call marker: ``!{name}`` or ``!{name -> a, b}``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["function_call"] = "function_call"
    name: str
    result_vars: list[str] = Field(default_factory=list)


ContentElement = Annotated[
    TextContent | VariableContent | FunctionCallContent,
    Field(discriminator="kind"),
]


class NodeDestination(BaseModel):
    """Target node in the same file: ``@node``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["node"] = "node"
    node: str


class FileTransferDestination(BaseModel):
    """Target node in a declared dependency: ``[file.bdl:node]``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["file_transfer"] = "file_transfer"
    file: str
    node: str


class ExitDestination(BaseModel):
    """Terminal destination: ``exit``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["exit"] = "exit"


Destination = Annotated[
    NodeDestination | FileTransferDestination | ExitDestination,
    Field(discriminator="kind"),
]


class Condition(BaseModel):
    """Variable whose truthiness gates an option. Never evaluated here."""

    model_config = ConfigDict(frozen=True)

    variable: str


class BranchOption(BaseModel):
    """
    Keyword-triggered transition from a node.

    Any keyword fires the option; matching is case-sensitive. Options are kept
    in source order because the first matching one wins at runtime.
    """

    model_config = ConfigDict(frozen=True)

    keywords: list[str]
    destination: Destination
    condition: Condition | None = None


class Node(BaseModel):
    """Named addressable point in the dialog graph."""

    name: str
    content: list[ContentElement] = Field(default_factory=list)
    options: list[BranchOption] = Field(default_factory=list)

    def add_content(self, element: ContentElement) -> None:
        self.content.append(element)

    def add_option(self, option: BranchOption) -> None:
        self.options.append(option)


class Document(BaseModel):
    """
    Parsed representation of one BDL source file.

    ``global_vars`` is None when the file declares no ``$global_vars`` block,
    which is distinct from an empty block. ``nodes`` keeps source order.

    Params:
        metadata: Header fields of the document
        global_vars: Global variable mapping, if a global block was declared
        local_vars: Local variable mapping, always present
        nodes: Node name to node mapping
    """

    metadata: Metadata = Field(default_factory=Metadata)
    global_vars: VariableMap | None = None
    local_vars: VariableMap = Field(default_factory=dict)
    nodes: dict[str, Node] = Field(default_factory=dict)

    def add_node(self, node: Node) -> None:
        """
        Insert a node, refusing to replace an existing one.

        Params:
            node: Node to insert under its own name

        Raises:
            NodeError: If a node with the same name is already present
        """
        if node.name in self.nodes:
            raise NodeError(node.name)
        self.nodes[node.name] = node

    def get_node(self, name: str) -> Node | None:
        return self.nodes.get(name)

    def dependencies(self, config: "ParserConfig | None" = None) -> "DependencySet":
        """
        Validated set of files this document may transfer control into.

        Params:
            config: Parser settings providing the dependency extension

        Returns:
            Frozen set of declared dependency file names

        Raises:
            DependencyError: If a declared name is invalid or repeated
        """
        from bdl.parsing.dependencies import validate_dependencies

        return validate_dependencies(self.metadata.required or [], config)

    def dangling_destinations(self) -> list[tuple[str, str]]:
        """
        Find same-file destinations that name no node of this document.

        Returns:
            List of (source node, missing target) pairs in source order
        """
        dangling = []
        for node in self.nodes.values():
            for option in node.options:
                destination = option.destination
                if (
                    isinstance(destination, NodeDestination)
                    and destination.node not in self.nodes
                ):
                    dangling.append((node.name, destination.node))
        return dangling

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, data: str | bytes) -> "Document":
        return cls.model_validate_json(data)
