"""Tests for openskills.frontmatter."""

from __future__ import annotations

from openskills.frontmatter import extract_yaml_field, has_valid_frontmatter, parse_metadata

SKILL_MD = """---
name: pdf
description:   Extract text and tables from PDF files
context: fork
---

# PDF

description: not frontmatter but still a matching line
"""


class TestHasValidFrontmatter:
    def test_leading_whitespace_allowed(self):
        assert has_valid_frontmatter("  ---\nname: x\n") is True

    def test_missing_delimiter(self):
        assert has_valid_frontmatter("name: x") is False

    def test_empty(self):
        assert has_valid_frontmatter("") is False

    def test_delimiter_not_at_start(self):
        assert has_valid_frontmatter("# Title\n---\nname: x\n---") is False


class TestExtractYamlField:
    def test_returns_trimmed_value(self):
        assert extract_yaml_field(SKILL_MD, "description") == "Extract text and tables from PDF files"

    def test_first_match_wins(self):
        assert extract_yaml_field(SKILL_MD, "description").startswith("Extract")

    def test_missing_field_is_empty(self):
        assert extract_yaml_field(SKILL_MD, "license") == ""

    def test_line_anchored(self):
        assert extract_yaml_field("  name: indented\n", "name") == ""

    def test_field_name_is_not_a_regex(self):
        assert extract_yaml_field("nameXdesc: y\n", "name.desc") == ""

    def test_empty_value_is_empty(self):
        assert extract_yaml_field("name:\nother: x\n", "name") == ""


class TestParseMetadata:
    def test_all_fields(self):
        meta = parse_metadata(SKILL_MD)
        assert meta.name == "pdf"
        assert meta.context == "fork"

    def test_context_optional(self):
        assert parse_metadata("---\nname: x\n---\n").context is None
