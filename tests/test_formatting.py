"""
Tests for writing documents back to dialog language text.
"""

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
from bdl.core.values import BooleanValue, EmptyValue, NumberValue, StringValue
from bdl.formatting import (
    format_content,
    format_destination,
    format_document,
    format_metadata,
    format_option,
    format_value,
    format_variables,
)
from bdl.parsing.parser import parse_document


class TestFormatPieces:
    def test_values(self):
        assert format_value(StringValue(value="")) == '""'
        assert format_value(StringValue(value="John")) == '"John"'
        assert format_value(NumberValue(value=3.0)) == "3"
        assert format_value(NumberValue(value=0.25)) == "0.25"
        assert format_value(BooleanValue(value=True)) == "true"
        assert format_value(EmptyValue()) == "{}"

    def test_metadata(self):
        metadata = Metadata(topic="T", version="2", required=["a.bdl", "b.bdl"])
        assert format_metadata(metadata) == "# Topic: T\n# Version: 2\n# Required: a.bdl, b.bdl"

    def test_variables(self):
        text = format_variables(
            "$local_vars:", {"a": NumberValue(value=1.0), "b": StringValue(value="x")}
        )
        assert text == '$local_vars: {\n    a: 1,\n    b: "x"\n}'

    def test_empty_variables(self):
        assert format_variables("$global_vars:", {}) == "$global_vars: {}"

    def test_content(self):
        content = [
            TextContent(text="Hi "),
            VariableContent(name="name"),
            FunctionCallContent(name="roll", result_vars=["a", "b"]),
            FunctionCallContent(name="beep"),
        ]
        assert format_content(content) == "Hi ${name}!{roll -> a, b}!{beep}"

    def test_adjacent_text_becomes_paragraphs(self):
        content = [TextContent(text="One"), TextContent(text="Two")]
        assert format_content(content) == "One\n\nTwo"

    def test_destinations(self):
        assert format_destination(NodeDestination(node="end")) == "@end"
        assert format_destination(FileTransferDestination(file="s.bdl", node="b")) == "[s.bdl:b]"
        assert format_destination(ExitDestination()) == "exit"

    def test_conditional_option(self):
        option = BranchOption(
            keywords=["open", "unlock"],
            destination=NodeDestination(node="vault"),
            condition=Condition(variable="has_key"),
        )
        assert format_option(option) == "?{has_key}{open|unlock: @vault}"


class TestDocumentRoundTrip:
    """Formatted documents parse back into equal documents."""

    def test_greeting(self, greeting_text):
        document = parse_document(greeting_text)
        assert parse_document(format_document(document)) == document

    def test_full_document(self, full_text):
        document = parse_document(full_text)
        assert parse_document(format_document(document)) == document

    def test_built_document(self):
        document = Document(
            metadata=Metadata(topic="Built", required=["shop.bdl"]),
            global_vars={},
            local_vars={"n": EmptyValue()},
        )
        node = Node(name="start")
        node.add_content(TextContent(text="First"))
        node.add_content(TextContent(text="Second"))
        node.add_option(
            BranchOption(
                keywords=["buy"],
                destination=FileTransferDestination(file="shop.bdl", node="buy"),
            )
        )
        document.add_node(node)
        document.add_node(Node(name="empty"))

        assert parse_document(format_document(document)) == document
