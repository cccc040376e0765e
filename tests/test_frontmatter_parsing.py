"""
Tests for frontmatter parsing.

Tests cover:
- Minimal YAML subset: scalar type inference, quotes, comments
- Documented limitations (inline arrays, dates stay strings)
- Degradation on missing or malformed blocks
- The PyYAML-backed parser behind the same interface
"""

from __future__ import annotations

import logging

import pytest

from content_manager.utils.frontmatter import (
    ParsedContent,
    get_parser,
    parse_frontmatter,
    parse_scalar,
    parse_simple_yaml,
    parse_yaml_frontmatter,
)


class TestParseFrontmatter:
    """Tests for the minimal frontmatter parser."""

    def test_parse_basic_frontmatter(self) -> None:
        content = """---
title: My Note
author: Jane
---
Body text here
"""

        result = parse_frontmatter(content)

        assert isinstance(result, ParsedContent)
        assert result.frontmatter == {"title": "My Note", "author": "Jane"}
        assert result.body == "Body text here\n"

    def test_inline_array_and_date_stay_strings(self) -> None:
        """tags: [a, b] is not exploded and dates are not converted."""
        content = "---\ntags: [typescript, mcp]\ndate: 2024-01-15\n---\nBody"

        result = parse_frontmatter(content)

        assert result.frontmatter["tags"] == "[typescript, mcp]"
        assert result.frontmatter["date"] == "2024-01-15"

    def test_no_frontmatter_returns_input_unchanged(self) -> None:
        content = "Just plain content\n\nwith two paragraphs\n"

        result = parse_frontmatter(content)

        assert result.frontmatter == {}
        assert result.body == content

    def test_block_must_open_the_text(self) -> None:
        content = "\n---\ntitle: late\n---\nBody"

        result = parse_frontmatter(content)

        assert result.frontmatter == {}
        assert result.body == content

    def test_missing_closing_marker_degrades(self, caplog: pytest.LogCaptureFixture) -> None:
        content = "---\ntitle: Unclosed\n\nBody without closing marker"

        with caplog.at_level(logging.WARNING):
            result = parse_frontmatter(content)

        assert result.frontmatter == {}
        assert result.body == content
        assert "missing closing marker" in caplog.text

    def test_body_never_contains_delimiter_block(self) -> None:
        content = "---\ntitle: x\n---\n---\nsecond rule stays in body"

        result = parse_frontmatter(content)

        assert result.frontmatter == {"title": "x"}
        assert result.body == "---\nsecond rule stays in body"

    def test_empty_block(self) -> None:
        result = parse_frontmatter("---\n---\nBody")

        assert result.frontmatter == {}
        assert result.body == "Body"

    def test_closing_marker_at_end_of_text(self) -> None:
        result = parse_frontmatter("---\ntitle: Only metadata\n---")

        assert result.frontmatter == {"title": "Only metadata"}
        assert result.body == ""

    def test_windows_line_endings(self) -> None:
        content = "---\r\ntitle: Windows\r\ncount: 3\r\n---\r\nBody"

        result = parse_frontmatter(content)

        assert result.frontmatter == {"title": "Windows", "count": 3}
        assert result.body == "Body"

    def test_value_with_colon_splits_on_first(self) -> None:
        result = parse_frontmatter('---\nurl: https://example.com:8080/a\n---\n')

        assert result.frontmatter["url"] == "https://example.com:8080/a"

    def test_key_order_preserved(self) -> None:
        result = parse_frontmatter("---\nzeta: 1\nalpha: 2\nmid: 3\n---\n")

        assert list(result.frontmatter) == ["zeta", "alpha", "mid"]

    def test_keys_are_case_sensitive(self) -> None:
        result = parse_frontmatter("---\nTitle: upper\ntitle: lower\n---\n")

        assert result.frontmatter == {"Title": "upper", "title": "lower"}


class TestSimpleYaml:
    """Tests for line parsing and type inference."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("false", False),
            ("null", None),
            ("42", 42),
            ("3.14", 3.14),
            ('"quoted"', "quoted"),
            ("'single'", "single"),
            ('"mismatched\'', '"mismatched\''),
            ("-5", "-5"),
            ("1e3", "1e3"),
            ("True", "True"),
            ("", ""),
        ],
    )
    def test_parse_scalar(self, raw: str, expected: object) -> None:
        assert parse_scalar(raw) == expected
        assert type(parse_scalar(raw)) is type(expected)

    def test_only_one_layer_of_quotes_removed(self) -> None:
        assert parse_scalar("\"'inner'\"") == "'inner'"

    def test_comments_blank_lines_and_colonless_lines_skipped(self) -> None:
        block = "# a comment\n\n  # indented comment\nno colon here\nkey: value"

        assert parse_simple_yaml(block) == {"key": "value"}

    def test_duplicate_key_last_wins(self) -> None:
        assert parse_simple_yaml("a: 1\na: 2") == {"a": 2}


class TestYamlFrontmatter:
    """Tests for the PyYAML-backed parser."""

    def test_lists_and_nesting_supported(self) -> None:
        content = "---\ntags: [typescript, mcp]\nmeta:\n  level: 2\n---\nBody"

        result = parse_yaml_frontmatter(content)

        assert result.frontmatter["tags"] == ["typescript", "mcp"]
        assert result.frontmatter["meta"] == {"level": 2}
        assert result.body == "Body"

    def test_dates_kept_as_strings(self) -> None:
        result = parse_yaml_frontmatter("---\ndate: 2024-01-15\n---\n")

        assert result.frontmatter["date"] == "2024-01-15"

    def test_invalid_yaml_degrades(self, caplog: pytest.LogCaptureFixture) -> None:
        content = "---\ntitle: [unclosed\n---\nBody"

        with caplog.at_level(logging.WARNING):
            result = parse_yaml_frontmatter(content)

        assert result == ParsedContent({}, content)
        assert "YAML parse error" in caplog.text

    def test_non_mapping_block_degrades(self) -> None:
        content = "---\n- just\n- a list\n---\nBody"

        result = parse_yaml_frontmatter(content)

        assert result.frontmatter == {}
        assert result.body == content

    def test_no_frontmatter(self) -> None:
        assert parse_yaml_frontmatter("plain") == ParsedContent({}, "plain")


class TestGetParser:
    def test_known_parsers(self) -> None:
        assert get_parser("simple") is parse_frontmatter
        assert get_parser("yaml") is parse_yaml_frontmatter

    def test_unknown_parser(self) -> None:
        with pytest.raises(ValueError, match="Unknown frontmatter parser"):
            get_parser("toml")
