"""
Tests for single-line classification.
"""

import pytest

from bdl.parsing.lines import (
    LineKind,
    classify_line,
    is_block_close,
    is_block_opener,
    is_comment_line,
    is_metadata_line,
    is_node_header,
    is_option_line,
    split_metadata_line,
)


class TestClassifyLine:
    """Each trimmed line falls into exactly one category."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("", LineKind.BLANK),
            ("    ", LineKind.BLANK),
            ("# just a comment", LineKind.COMMENT),
            ("# Note: unknown key", LineKind.COMMENT),
            ("# Topic: Greeting", LineKind.METADATA),
            ("  # REQUIRED: a.bdl", LineKind.METADATA),
            ("$global_vars: {", LineKind.GLOBAL_BLOCK_OPEN),
            ("$local_vars: {", LineKind.LOCAL_BLOCK_OPEN),
            ("}", LineKind.BLOCK_CLOSE),
            ("@start", LineKind.NODE_HEADER),
            ("  @ start  ", LineKind.NODE_HEADER),
            ("{yes: @next}", LineKind.OPTION),
            ("?{has_key}{open: @vault}", LineKind.OPTION),
            ("Hello there.", LineKind.CONTENT),
            ("Hello ${name}", LineKind.CONTENT),
            ("}}", LineKind.CONTENT),
        ],
    )
    def test_classify(self, line, expected):
        assert classify_line(line) == expected


class TestPredicates:
    def test_comment(self):
        assert is_comment_line("  # hi")
        assert not is_comment_line("hi #")

    def test_metadata_keys_are_case_insensitive(self):
        assert is_metadata_line("# topic: a")
        assert is_metadata_line("# VERSION: 2")
        assert not is_metadata_line("# Owner: me")
        assert not is_metadata_line("# no colon here")

    def test_block_delimiters(self):
        assert is_block_opener("$global_vars:")
        assert is_block_opener("  $local_vars: {")
        assert not is_block_opener("$other_vars: {")
        assert is_block_close("  }  ")
        assert not is_block_close("} x")

    def test_node_header_and_option(self):
        assert is_node_header("@end")
        assert not is_node_header("email@example.com")
        assert is_option_line("{a: exit}")
        assert is_option_line("?{flag}{a: exit}")
        assert not is_option_line("say {a}")


class TestSplitMetadataLine:
    def test_splits_on_first_colon(self):
        assert split_metadata_line("# Topic: Time: 10:00") == ("topic", "Time: 10:00")

    def test_non_comment_is_none(self):
        assert split_metadata_line("Topic: x") is None

    def test_comment_without_colon_is_none(self):
        assert split_metadata_line("# free text") is None
