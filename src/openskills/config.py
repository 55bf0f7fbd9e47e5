"""Configuration defaults and path helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import NamedTuple

from openskills.errors import ConfigError

SKILL_FILENAME = "SKILL.md"

# ── Skill folders (relative to the project root or the home directory) ──
DEFAULT_FOLDER = ".claude/skills"
UNIVERSAL_FOLDER = ".agent/skills"
CURSOR_FOLDER = ".cursor/skills"

# ── Manifest ──
DEFAULT_MANIFEST = "AGENTS.md"

# ── Anthropic marketplace skill names (global installs may shadow Claude plugins) ──
MARKETPLACE_SKILLS = frozenset(
    {
        # document-skills plugin
        "xlsx",
        "docx",
        "pptx",
        "pdf",
        # example-skills plugin
        "algorithmic-art",
        "artifacts-builder",
        "brand-guidelines",
        "canvas-design",
        "internal-comms",
        "mcp-builder",
        "skill-creator",
        "slack-gif-creator",
        "template-skill",
        "theme-factory",
        "webapp-testing",
    }
)


class SearchDir(NamedTuple):
    path: Path
    label: str


def home_dir() -> Path:
    """Resolve the user home directory. Respects OPENSKILLS_HOME env var."""
    override = os.environ.get("OPENSKILLS_HOME")
    return Path(override) if override else Path.home()


def git_executable() -> str:
    return os.environ.get("OPENSKILLS_GIT", "git")


def clone_timeout() -> float | None:
    """Seconds to wait for `git clone`, from OPENSKILLS_CLONE_TIMEOUT. None means no limit."""
    raw = os.environ.get("OPENSKILLS_CLONE_TIMEOUT")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(
            f"Invalid OPENSKILLS_CLONE_TIMEOUT: {raw!r}",
            hint="Set it to a number of seconds, e.g. OPENSKILLS_CLONE_TIMEOUT=60, or unset it.",
        ) from None


def skill_folder(universal: bool = False) -> str:
    return UNIVERSAL_FOLDER if universal else DEFAULT_FOLDER


def skills_dir(working_dir: Path, home: Path, *, is_global: bool = False, universal: bool = False) -> Path:
    """Install target: project scope unless is_global, .agent/skills when universal."""
    base = home if is_global else working_dir
    return base / skill_folder(universal)


def search_dirs(working_dir: Path, home: Path) -> list[SearchDir]:
    """All skill directories in priority order. Earlier entries win on duplicate names."""
    return [
        SearchDir(working_dir / UNIVERSAL_FOLDER, f"{UNIVERSAL_FOLDER}/ (project universal)"),
        SearchDir(home / UNIVERSAL_FOLDER, f"~/{UNIVERSAL_FOLDER}/ (global universal)"),
        SearchDir(working_dir / DEFAULT_FOLDER, f"{DEFAULT_FOLDER}/ (project)"),
        SearchDir(working_dir / CURSOR_FOLDER, f"{CURSOR_FOLDER}/ (project cursor)"),
        SearchDir(home / DEFAULT_FOLDER, f"~/{DEFAULT_FOLDER}/ (global)"),
        SearchDir(home / CURSOR_FOLDER, f"~/{CURSOR_FOLDER}/ (global cursor)"),
    ]
