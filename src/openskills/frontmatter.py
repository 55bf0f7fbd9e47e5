"""Lightweight YAML frontmatter checks for SKILL.md files (line regex, no YAML parser)."""

from __future__ import annotations

import re

from openskills.models import SkillMetadata

FRONTMATTER_DELIMITER = "---"


def has_valid_frontmatter(content: str) -> bool:
    """True if the content (ignoring leading whitespace) opens with a `---` delimiter."""
    return content.lstrip().startswith(FRONTMATTER_DELIMITER)


def extract_yaml_field(content: str, field: str) -> str:
    """Return the trimmed value of the first `field:` line, or "" if there is none."""
    match = re.search(rf"^{re.escape(field)}:[ \t]*(.+?)$", content, re.MULTILINE)
    return match.group(1).strip() if match else ""


def parse_metadata(content: str) -> SkillMetadata:
    context = extract_yaml_field(content, "context")
    return SkillMetadata(
        name=extract_yaml_field(content, "name"),
        description=extract_yaml_field(content, "description"),
        context=context or None,
    )
