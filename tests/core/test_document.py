"""
Tests for the document model and node assembly.
"""

import pytest

from bdl.core.document import (
    BranchOption,
    Condition,
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
from bdl.core.values import NumberValue, StringValue
from bdl.exceptions import DependencyError, NodeError


class TestDocumentConstruction:
    """A new document starts with metadata and empty collections."""

    def test_new_document_is_empty(self):
        metadata = Metadata(topic="Test")
        document = Document(metadata=metadata)

        assert document.metadata == metadata
        assert document.global_vars is None
        assert document.local_vars == {}
        assert document.nodes == {}

    def test_default_metadata_has_no_fields(self):
        metadata = Metadata()
        assert metadata.topic is None
        assert metadata.description is None
        assert metadata.author is None
        assert metadata.version is None
        assert metadata.required is None


class TestAddNode:
    """Node insertion rejects duplicates instead of overwriting."""

    def test_add_node(self):
        document = Document(metadata=Metadata())
        document.add_node(Node(name="start"))

        assert list(document.nodes) == ["start"]
        assert document.get_node("start").name == "start"
        assert document.get_node("missing") is None

    def test_duplicate_node_rejected(self):
        document = Document(metadata=Metadata())
        first = Node(name="start")
        first.add_content(TextContent(text="first"))
        document.add_node(first)

        with pytest.raises(NodeError) as exc_info:
            document.add_node(Node(name="start"))

        assert exc_info.value.node_name == "start"
        assert document.nodes["start"].content == [TextContent(text="first")]

    def test_nodes_keep_insertion_order(self):
        document = Document(metadata=Metadata())
        for name in ["c", "a", "b"]:
            document.add_node(Node(name=name))
        assert list(document.nodes) == ["c", "a", "b"]


class TestNode:
    """Content and options keep source order."""

    def test_add_content_and_options(self):
        node = Node(name="start")
        node.add_content(TextContent(text="Hello "))
        node.add_content(VariableContent(name="player"))
        node.add_content(FunctionCallContent(name="roll", result_vars=["result"]))
        node.add_option(
            BranchOption(keywords=["yes"], destination=NodeDestination(node="next"))
        )
        node.add_option(BranchOption(keywords=["no"], destination=ExitDestination()))

        assert [type(element) for element in node.content] == [
            TextContent,
            VariableContent,
            FunctionCallContent,
        ]
        assert [option.keywords for option in node.options] == [["yes"], ["no"]]

    def test_function_call_defaults_to_no_results(self):
        assert FunctionCallContent(name="roll").result_vars == []


class TestDependencies:
    """Documents validate their own declared dependencies."""

    def test_dependencies_from_metadata(self):
        document = Document(metadata=Metadata(required=["a.bdl", "b.bdl"]))
        assert document.dependencies() == frozenset({"a.bdl", "b.bdl"})

    def test_no_required_means_no_dependencies(self):
        assert Document(metadata=Metadata()).dependencies() == frozenset()

    def test_duplicate_declaration_fails(self):
        document = Document(metadata=Metadata(required=["a.bdl", "a.bdl"]))
        with pytest.raises(DependencyError):
            document.dependencies()


class TestDanglingDestinations:
    """Same-file destinations that name no node are reported."""

    def test_reports_missing_targets_only(self):
        document = Document(metadata=Metadata(required=["shop.bdl"]))
        start = Node(name="start")
        start.add_option(
            BranchOption(keywords=["a"], destination=NodeDestination(node="end"))
        )
        start.add_option(
            BranchOption(keywords=["b"], destination=NodeDestination(node="nowhere"))
        )
        start.add_option(
            BranchOption(
                keywords=["c"],
                destination=FileTransferDestination(file="shop.bdl", node="buy"),
            )
        )
        document.add_node(start)
        document.add_node(Node(name="end"))

        assert document.dangling_destinations() == [("start", "nowhere")]


class TestJsonRoundTrip:
    """Documents serialize through pydantic and validate back to equal models."""

    def test_round_trip(self):
        document = Document(
            metadata=Metadata(topic="T", required=["shop.bdl"]),
            global_vars={"gold": NumberValue(value=5.0)},
            local_vars={"name": StringValue(value="")},
        )
        node = Node(name="start")
        node.add_content(TextContent(text="Hi"))
        node.add_option(
            BranchOption(
                keywords=["buy"],
                destination=FileTransferDestination(file="shop.bdl", node="buy"),
                condition=Condition(variable="gold"),
            )
        )
        document.add_node(node)

        restored = Document.from_json(document.to_json())

        assert restored == document
        assert isinstance(restored.nodes["start"].options[0].destination, FileTransferDestination)
        assert restored.local_vars["name"] == StringValue(value="")

    def test_absent_global_block_survives_round_trip(self):
        document = Document(metadata=Metadata())
        assert Document.from_json(document.to_json()).global_vars is None
