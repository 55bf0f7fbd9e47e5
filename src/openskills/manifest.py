"""AGENTS.md skills section: parse, render, replace and remove."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from openskills.models import Skill

TABLE_START_MARKER = "<!-- SKILLS_TABLE_START -->"
TABLE_END_MARKER = "<!-- SKILLS_TABLE_END -->"
REMOVED_PLACEHOLDER = "<!-- Skills section removed -->"

_SKILL_BLOCK_RE = re.compile(r"<skill>[\s\S]*?<name>([^<]+)</name>[\s\S]*?</skill>")
_XML_SECTION_RE = re.compile(r"<skills_system[^>]*>(?:(?!<skills_system)[\s\S])*?</skills_system>")
_XML_WRAPPER_RE = re.compile(r"<skills_system[^>]*>|</skills_system>")
_TABLE_RE = re.compile(
    re.escape(TABLE_START_MARKER) + rf"(?:(?!{re.escape(TABLE_START_MARKER)})[\s\S])*?" + re.escape(TABLE_END_MARKER)
)

_USAGE = """\
<usage>
When users ask you to perform tasks, check if any of the available skills below can help complete the task more effectively. Skills provide specialized capabilities and domain knowledge.

How to use skills:
- Invoke: Bash("openskills read <skill-name>")
- The skill content will load with detailed instructions on how to complete the task
- Base directory provided in output for resolving bundled resources (references/, scripts/, assets/)

Usage notes:
- Only use skills listed in <available_skills> below
- Do not invoke a skill that is already loaded in your context
- Each skill invocation is stateless
</usage>"""  # noqa: E501


def parse_current_skills(content: str) -> list[str]:
    """Names of skills already listed in <skill> blocks."""
    return [m.group(1).strip() for m in _SKILL_BLOCK_RE.finditer(content)]


def _skill_block(skill: Skill) -> str:
    return (
        "<skill>\n"
        f"<name>{skill.name}</name>\n"
        f"<description>{skill.description}</description>\n"
        f"<location>{skill.location}</location>\n"
        "</skill>"
    )


def generate_skills_xml(skills: Sequence[Skill]) -> str:
    """Render the full <skills_system> section, skills in the given order."""
    skill_tags = "\n\n".join(_skill_block(s) for s in skills)
    return (
        '<skills_system priority="1">\n'
        "\n"
        "## Available Skills\n"
        "\n"
        f"{TABLE_START_MARKER}\n"
        f"{_USAGE}\n"
        "\n"
        "<available_skills>\n"
        "\n"
        f"{skill_tags}\n"
        "\n"
        "</available_skills>\n"
        f"{TABLE_END_MARKER}\n"
        "\n"
        "</skills_system>"
    )


def _table_inner(section: str) -> str:
    """Content to splice between existing table markers."""
    start = section.find(TABLE_START_MARKER)
    end = section.find(TABLE_END_MARKER, start + 1) if start != -1 else -1
    if start != -1 and end != -1:
        return section[start + len(TABLE_START_MARKER) : end].strip("\n")
    return _XML_WRAPPER_RE.sub("", section).strip("\n")


def replace_skills_section(content: str, new_section: str) -> str:
    """Swap the skills section in content for new_section, appending when no complete section exists."""
    if _XML_SECTION_RE.search(content):
        return _XML_SECTION_RE.sub(lambda _: new_section, content, count=1)

    if _TABLE_RE.search(content):
        inner = _table_inner(new_section)
        replacement = f"{TABLE_START_MARKER}\n{inner}\n{TABLE_END_MARKER}"
        return _TABLE_RE.sub(lambda _: replacement, content, count=1)

    return content.rstrip() + "\n\n" + new_section + "\n"


def remove_skills_section(content: str) -> str:
    """Replace the skills section with a placeholder comment. No complete section, no change."""
    if _XML_SECTION_RE.search(content):
        return _XML_SECTION_RE.sub(lambda _: REMOVED_PLACEHOLDER, content, count=1)

    if _TABLE_RE.search(content):
        replacement = f"{TABLE_START_MARKER}\n{REMOVED_PLACEHOLDER}\n{TABLE_END_MARKER}"
        return _TABLE_RE.sub(lambda _: replacement, content, count=1)

    return content


def has_skills_section(content: str) -> bool:
    """True when replace_skills_section would replace in place rather than append."""
    return bool(_XML_SECTION_RE.search(content) or _TABLE_RE.search(content))
