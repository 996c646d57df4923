"""
Node, content and option parsing.

This module turns the body of a dialog document into nodes. A node starts at
an ``@name`` line and runs until the next node header, variable block or the
end of input. Inside a node, option lines become branch options and all other
non-blank, non-comment lines are content. Consecutive content lines form one
run; the run is split into text and the ``${var}`` / ``!{func -> a, b}``
markers embedded in it.
"""

import re

from bdl.config import DEFAULT_CONFIG, ParserConfig
from bdl.core.document import (
    BranchOption,
    Condition,
    ContentElement,
    Destination,
    ExitDestination,
    FileTransferDestination,
    FunctionCallContent,
    Node,
    NodeDestination,
    TextContent,
    VariableContent,
)
from bdl.core.types import DependencySet
from bdl.exceptions import ErrorContext, NodeError, ParseError
from bdl.parsing.dependencies import validate_file_transfer
from bdl.parsing.lines import (
    CONDITIONAL_OPTION_MARKER,
    NODE_MARKER,
    LineKind,
    ParseState,
    classify_line,
    is_block_close,
)
from bdl.parsing.variables import open_block

EXIT_KEYWORD = "exit"


class NodeParser:
    """Line-by-line state machine producing the node mapping of a document."""

    IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

    FORBIDDEN_NODE_CHARS = "{}[]"

    # ${name} or !{name} / !{name -> a, b}; markers never span lines
    MARKER_PATTERN = re.compile(
        r"\$\{(?P<variable>[^{}]*)\}|!\{(?P<function>[^{}]*)\}"
    )

    # ?{variable} prefix of a conditional option
    CONDITION_PATTERN = re.compile(r"^\?\{(?P<variable>[^{}]*)\}\s*(?P<rest>.*)$")

    # {kw1|kw2: destination}
    OPTION_PATTERN = re.compile(r"^\{(?P<body>.*)\}$")

    # [file.bdl:node]
    FILE_TRANSFER_PATTERN = re.compile(
        r"^\[\s*(?P<file>[^\]:]*?)\s*:\s*(?P<node>[^\]:]*?)\s*\]$"
    )

    def __init__(
        self,
        text: str,
        dependencies: DependencySet,
        config: ParserConfig | None = None,
    ):
        self.text = text
        self.dependencies = dependencies
        self.config = config or DEFAULT_CONFIG

    def parse(self) -> dict[str, Node]:
        """
        Parse every node in the text.

        Returns:
            Node name to node mapping in source order

        Raises:
            ParseError: On a malformed header, option or content marker
            NodeError: If a node name is declared twice
            DependencyError: If a file transfer targets an undeclared file
        """
        nodes: dict[str, Node] = {}
        state = ParseState.NONE
        current: Node | None = None
        run: list[tuple[int, str]] = []

        for index, line in enumerate(self.text.splitlines()):
            line_number = index + 1

            if state in (ParseState.IN_GLOBAL_BLOCK, ParseState.IN_LOCAL_BLOCK):
                if is_block_close(line):
                    state = ParseState.NONE
                continue

            stripped = line.strip()
            kind = classify_line(stripped)

            if kind in (LineKind.GLOBAL_BLOCK_OPEN, LineKind.LOCAL_BLOCK_OPEN):
                self._close_node(current, run, nodes)
                current, run = None, []
                block_state, closed = open_block(line, line_number)
                state = ParseState.NONE if closed else block_state
                continue

            if kind == LineKind.NODE_HEADER:
                self._close_node(current, run, nodes)
                current, run = self._open_node(stripped, line_number, nodes), []
                state = ParseState.IN_NODE
                continue

            if state != ParseState.IN_NODE:
                continue

            if kind in (LineKind.BLANK, LineKind.COMMENT, LineKind.METADATA):
                self._flush_run(current, run)
                run = []
            elif kind == LineKind.OPTION:
                self._flush_run(current, run)
                run = []
                current.add_option(self.parse_option(stripped, line_number))
            else:
                run.append((line_number, stripped))

        self._close_node(current, run, nodes)
        return nodes

    def _open_node(
        self, header: str, line_number: int, nodes: dict[str, Node]
    ) -> Node:
        name = header[len(NODE_MARKER) :].strip()
        if not name:
            raise ParseError(
                "Empty node name",
                ErrorContext(line_number=line_number, line_text=header),
            )
        if name in nodes:
            raise NodeError(name, "is declared more than once")
        return Node(name=name)

    def _close_node(
        self,
        node: Node | None,
        run: list[tuple[int, str]],
        nodes: dict[str, Node],
    ) -> None:
        if node is None:
            return
        self._flush_run(node, run)
        nodes[node.name] = node

    def _flush_run(self, node: Node, run: list[tuple[int, str]]) -> None:
        for element in self.tokenize_content(run):
            node.add_content(element)

    def tokenize_content(self, run: list[tuple[int, str]]) -> list[ContentElement]:
        """
        Split a run of content lines into text and marker elements.

        Text between markers is kept verbatim; the lines of one run are joined
        with newlines. Empty text is never emitted.

        Params:
            run: (line number, trimmed line) pairs of consecutive content lines

        Returns:
            Content elements in render order

        Raises:
            ParseError: If a marker holds an invalid name
        """
        elements: list[ContentElement] = []
        buffer: list[str] = []

        def flush_text() -> None:
            text = "".join(buffer)
            if text:
                elements.append(TextContent(text=text))
            buffer.clear()

        for offset, (line_number, line) in enumerate(run):
            if offset:
                buffer.append("\n")

            position = 0
            for match in self.MARKER_PATTERN.finditer(line):
                buffer.append(line[position : match.start()])
                flush_text()
                context = ErrorContext(line_number=line_number, line_text=line)
                elements.append(self._parse_marker(match, context))
                position = match.end()
            buffer.append(line[position:])

        flush_text()
        return elements

    def _parse_marker(self, match: re.Match, context: ErrorContext) -> ContentElement:
        variable = match.group("variable")
        if variable is not None:
            name = variable.strip()
            if not self.IDENTIFIER_PATTERN.match(name):
                raise ParseError(f"Invalid variable name: '{name}'", context)
            return VariableContent(name=name)

        name, arrow, results = match.group("function").partition("->")
        name = name.strip()
        if not self.IDENTIFIER_PATTERN.match(name):
            raise ParseError(f"Invalid function name: '{name}'", context)

        result_vars = []
        if arrow:
            result_vars = [result.strip() for result in results.split(",")]
            for result in result_vars:
                if not self.IDENTIFIER_PATTERN.match(result):
                    raise ParseError(
                        f"Invalid result variable '{result}' for function '{name}'",
                        context,
                    )

        return FunctionCallContent(name=name, result_vars=result_vars)

    def parse_option(self, line: str, line_number: int | None = None) -> BranchOption:
        """
        Parse an option line.

        Grammar: ``{kw1|kw2: destination}`` or
        ``?{variable}{kw1|kw2: destination}``.

        Params:
            line: Trimmed option line
            line_number: 1-based position of the line, used in error context

        Returns:
            The parsed BranchOption

        Raises:
            ParseError: If the line does not follow the option grammar
            DependencyError: If a file transfer targets an undeclared file
        """
        context = ErrorContext(line_number=line_number, line_text=line)
        condition = None
        body = line

        if line.startswith(CONDITIONAL_OPTION_MARKER):
            condition_match = self.CONDITION_PATTERN.match(line)
            if not condition_match:
                raise ParseError("Malformed option condition", context)
            variable = condition_match.group("variable").strip()
            if not self.IDENTIFIER_PATTERN.match(variable):
                raise ParseError(f"Invalid condition variable: '{variable}'", context)
            condition = Condition(variable=variable)
            body = condition_match.group("rest").strip()

        option_match = self.OPTION_PATTERN.match(body)
        if not option_match:
            raise ParseError("Malformed option", context)

        inner = option_match.group("body")
        if ":" not in inner:
            raise ParseError("Option is missing a destination", context)

        keywords_str, destination_str = inner.split(":", 1)
        keywords = [keyword.strip() for keyword in keywords_str.split("|")]
        if not all(keywords):
            raise ParseError("Empty option keyword", context)
        for keyword in keywords:
            if any(char in keyword for char in "{}"):
                raise ParseError(f"Invalid option keyword: '{keyword}'", context)

        destination = self.parse_destination(destination_str.strip(), context)
        return BranchOption(
            keywords=keywords, destination=destination, condition=condition
        )

    def parse_destination(
        self, destination: str, context: ErrorContext | None = None
    ) -> Destination:
        """
        Resolve the destination part of an option.

        Params:
            destination: ``@node``, ``[file.bdl:node]`` or ``exit``
            context: Location of the option line for error messages

        Returns:
            The matching Destination variant

        Raises:
            ParseError: If the destination has none of the three forms
            DependencyError: If a file transfer targets an undeclared file
        """
        if destination == EXIT_KEYWORD:
            return ExitDestination()

        if destination.startswith(NODE_MARKER):
            name = destination[len(NODE_MARKER) :].strip()
            if not name:
                raise ParseError("Empty destination node name", context)
            if any(char in name for char in self.FORBIDDEN_NODE_CHARS):
                raise ParseError(f"Invalid destination node name: '{name}'", context)
            return NodeDestination(node=name)

        transfer_match = self.FILE_TRANSFER_PATTERN.match(destination)
        if transfer_match:
            file = transfer_match.group("file")
            node = transfer_match.group("node")
            if not file or not node:
                raise ParseError(f"Incomplete file transfer: {destination}", context)
            validate_file_transfer(file, self.dependencies, self.config)
            return FileTransferDestination(file=file, node=node)

        raise ParseError(f"Invalid option destination: {destination}", context)


def parse_nodes(
    text: str,
    dependencies: DependencySet,
    config: ParserConfig | None = None,
) -> dict[str, Node]:
    """
    Convenience function to parse the nodes of a document.

    Params:
        text: Full document text
        dependencies: Validated dependency set of the same document
        config: Parser settings

    Returns:
        Node name to node mapping in source order

    Raises:
        ParseError: On malformed node syntax
        NodeError: If a node name is declared twice
        DependencyError: If a file transfer targets an undeclared file
    """
    parser = NodeParser(text, dependencies, config)
    return parser.parse()
