"""
Loading dialog documents from disk.

The parser only ever sees one text buffer. This module sits above it: it
reads files, parses them lazily by name, caches each parsed Document for the
lifetime of the loader and follows file-transfer destinations into the
documents they name.
"""

import logging
from pathlib import Path

from bdl.config import DEFAULT_CONFIG, ParserConfig
from bdl.core.document import Document, FileTransferDestination, Node
from bdl.exceptions import ErrorContext, NodeError, ParseError, VariableError
from bdl.parsing.dependencies import validate_file_transfer
from bdl.parsing.parser import parse_document

logger = logging.getLogger(__name__)


def load_document(path: str | Path, config: ParserConfig | None = None) -> Document:
    """
    Read and parse one document file.

    Params:
        path: Location of the ``.bdl`` file
        config: Parser settings, including the file encoding

    Returns:
        The parsed Document

    Raises:
        OSError: If the file cannot be read
        ParseError: With the file name added to its context
        DependencyError, NodeError: As raised by the parser
    """
    config = config or DEFAULT_CONFIG
    path = Path(path)
    text = path.read_text(encoding=config.encoding)

    try:
        document = parse_document(text, config)
    except ParseError as e:
        context = e.context or ErrorContext()
        raise ParseError(
            e.message,
            ErrorContext(
                line_number=context.line_number,
                line_text=context.line_text,
                file_name=path.name,
            ),
        ) from e

    logger.debug("Parsed %s: %d nodes", path.name, len(document.nodes))
    return document


class DocumentLoader:
    """Lazily loads and caches the documents of one dialog project.

    Responsibilities:
      - Resolve file names relative to a root directory.
      - Parse each file at most once per loader instance.
      - Allow ``$global_vars`` only in the configured entry file.
      - Follow file-transfer destinations into their target documents.
    """

    def __init__(self, root: str | Path, config: ParserConfig | None = None):
        self.root = Path(root)
        self.config = config or DEFAULT_CONFIG
        self._documents: dict[str, Document] = {}

    def get(self, file_name: str) -> Document:
        """
        Get a document by file name, parsing it on first access.

        Params:
            file_name: File name relative to the loader root

        Returns:
            The cached or freshly parsed Document

        Raises:
            VariableError: If a non-entry file declares global variables
            ParseError, DependencyError, NodeError: As raised while parsing
        """
        if file_name in self._documents:
            logger.debug("Cache hit for %s", file_name)
            return self._documents[file_name]

        document = load_document(self.root / file_name, self.config)

        if document.global_vars is not None and file_name != self.config.entry_file:
            raise VariableError(
                f"Global variables may only be declared in '{self.config.entry_file}', "
                f"found in '{file_name}'"
            )

        for source, target in document.dangling_destinations():
            logger.warning(
                "Node '%s' in %s points to missing node '%s'", source, file_name, target
            )

        self._documents[file_name] = document
        return document

    def entry(self) -> Document:
        return self.get(self.config.entry_file)

    def resolve_transfer(
        self, document: Document, destination: FileTransferDestination
    ) -> tuple[Document, Node]:
        """
        Follow a file-transfer destination of a loaded document.

        Params:
            document: Document that owns the destination
            destination: The ``[file.bdl:node]`` destination to follow

        Returns:
            The target document and the node the destination names

        Raises:
            DependencyError: If the target file is not a declared dependency
            NodeError: If the target document has no such node
        """
        validate_file_transfer(
            destination.file, document.dependencies(self.config), self.config
        )
        target = self.get(destination.file)

        node = target.get_node(destination.node)
        if node is None:
            raise NodeError(destination.node, f"does not exist in '{destination.file}'")
        return target, node

    def loaded(self) -> list[str]:
        """List the file names parsed so far, in load order."""
        return list(self._documents)

    def clear(self) -> None:
        """Forget every cached document so the next access re-reads from disk."""
        self._documents.clear()
