"""Skill discovery: recursive search of install sources, flat enumeration of installed skills."""

from __future__ import annotations

import logging
from pathlib import Path, PurePath

from openskills.config import SKILL_FILENAME, search_dirs
from openskills.fs import LOCAL_FS, FileSystem
from openskills.frontmatter import extract_yaml_field
from openskills.models import Skill, SkillLocation, SkillScope

logger = logging.getLogger(__name__)

_SKIPPED_DIRS = frozenset({".git"})


def skill_scope(path: Path, working_dir: Path) -> SkillScope:
    """Classify a path as project-scoped when it lies under working_dir."""
    return "project" if path.is_relative_to(working_dir) else "global"


def is_plain_name(name: str) -> bool:
    """True for a single path component that cannot walk out of its parent."""
    if not name or name in {".", ".."}:
        return False
    return "/" not in name and "\\" not in name and PurePath(name).name == name


def find_skills(root: Path, fs: FileSystem = LOCAL_FS) -> list[Path]:
    """Find every directory under root that directly contains SKILL.md.

    Depth-first in sorted order. A recognized skill directory is not searched
    further; its siblings are. Unreadable directories are skipped.
    """
    found: list[Path] = []
    try:
        entries = sorted(fs.list_dir(root))
    except OSError:
        logger.debug("Skipping unreadable directory %s", root, exc_info=True)
        return found

    for entry in entries:
        if entry.name in _SKIPPED_DIRS or not fs.is_dir(entry):
            continue
        if fs.is_file(entry / SKILL_FILENAME):
            found.append(entry)
        else:
            found.extend(find_skills(entry, fs))
    return found


def find_all_skills(working_dir: Path, home: Path, fs: FileSystem = LOCAL_FS) -> list[Skill]:
    """Enumerate installed skills across all search directories, first name wins."""
    skills: list[Skill] = []
    seen: set[str] = set()

    for search_dir in search_dirs(working_dir, home):
        root = search_dir.path
        if not fs.is_dir(root):
            continue
        try:
            entries = sorted(fs.list_dir(root))
        except OSError:
            logger.debug("Skipping unreadable search directory %s", root, exc_info=True)
            continue

        for entry in entries:
            if entry.name in seen or not fs.is_dir(entry):
                continue
            skill_md = entry / SKILL_FILENAME
            if not fs.is_file(skill_md):
                continue
            try:
                content = fs.read_text(skill_md)
            except OSError:
                logger.debug("Skipping unreadable %s", skill_md, exc_info=True)
                continue
            seen.add(entry.name)
            skills.append(
                Skill(
                    name=entry.name,
                    description=extract_yaml_field(content, "description"),
                    location=skill_scope(root, working_dir),
                    path=entry.as_posix(),
                )
            )
    return skills


def find_skill(name: str, working_dir: Path, home: Path, fs: FileSystem = LOCAL_FS) -> SkillLocation | None:
    """Locate an installed skill by name in priority order."""
    if not is_plain_name(name):
        return None
    for search_dir in search_dirs(working_dir, home):
        skill_md = search_dir.path / name / SKILL_FILENAME
        if fs.is_file(skill_md):
            return SkillLocation(path=skill_md, base_dir=skill_md.parent, source=search_dir.path)
    return None
