"""
BDL - Parser and document model for the Branching Dialog Language

BDL files describe branching dialog trees: named nodes with text, variable
interpolation, function-call markers and keyword-triggered options.
"""

from importlib.metadata import version

from bdl.config import DEFAULT_CONFIG, ParserConfig
from bdl.core.document import Document, Metadata, Node
from bdl.loader import DocumentLoader, load_document
from bdl.parsing.parser import DialogParser, parse_document

__version__ = version("bdl")

__all__ = [
    "__version__",
    "DEFAULT_CONFIG",
    "DialogParser",
    "Document",
    "DocumentLoader",
    "Metadata",
    "Node",
    "ParserConfig",
    "load_document",
    "parse_document",
]
