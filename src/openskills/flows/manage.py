"""Installed-skill commands: list, read, remove, and interactive manage."""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

import click

from openskills.config import search_dirs
from openskills.discovery import find_all_skills, find_skill, skill_scope
from openskills.errors import SkillNotFoundError
from openskills.fs import LOCAL_FS, FileSystem
from openskills.prompts import Choice, Prompter

if TYPE_CHECKING:
    from pathlib import Path

    from openskills.models import Skill, SkillLocation

logger = logging.getLogger(__name__)

INSTALL_HINT = "Install skills: openskills install owner/repo"


def _sorted(skills: list[Skill]) -> list[Skill]:
    """Project skills first, then by name."""
    return sorted(skills, key=lambda s: (s.location != "project", s.name))


def list_skills(working_dir: Path, home: Path, fs: FileSystem = LOCAL_FS) -> list[Skill]:
    """Print every installed skill with location and description, then a summary."""
    skills = _sorted(find_all_skills(working_dir, home, fs))
    if not skills:
        click.echo("No skills installed.")
        click.secho(f"\n{INSTALL_HINT}", dim=True)
        return skills

    width = max(len(s.name) for s in skills)
    for skill in skills:
        if skill.location == "project":
            tag = click.style("(project)", fg="blue")
        else:
            tag = click.style("(global)", dim=True)
        click.echo(f"  {click.style(skill.name.ljust(width), bold=True)}  {tag}")
        if skill.description:
            click.secho(f"    {skill.description}", dim=True)

    project = sum(1 for s in skills if s.location == "project")
    click.echo(f"\nSummary: {project} project, {len(skills) - project} global ({len(skills)} total)")
    return skills


def _not_found_hint(working_dir: Path, home: Path) -> str:
    lines = ["Searched:"]
    lines += [f"  {d.label}" for d in search_dirs(working_dir, home)]
    lines += ["", INSTALL_HINT]
    return "\n".join(lines)


def read_skill(name: str, working_dir: Path, home: Path, fs: FileSystem = LOCAL_FS) -> SkillLocation:
    """Print a skill's SKILL.md to stdout, framed for agent consumption."""
    location = find_skill(name, working_dir, home, fs)
    if location is None:
        raise SkillNotFoundError(f"Skill '{name}' not found", hint=_not_found_hint(working_dir, home))

    content = fs.read_text(location.path)
    click.echo(f"Reading: {name}")
    click.echo(f"Base directory: {location.base_dir.as_posix()}")
    click.echo()
    click.echo(content)
    click.echo()
    click.echo(f"Skill read: {name}")
    return location


def _delete(location: SkillLocation) -> None:
    shutil.rmtree(location.base_dir)
    logger.info("Removed %s", location.base_dir)


def remove_skill(name: str, working_dir: Path, home: Path, fs: FileSystem = LOCAL_FS) -> SkillLocation:
    """Delete an installed skill's directory."""
    location = find_skill(name, working_dir, home, fs)
    if location is None:
        raise SkillNotFoundError(f"Skill '{name}' not found", hint="List installed skills: openskills list")

    _delete(location)
    scope = skill_scope(location.source, working_dir)
    click.echo(f"{click.style('✓', fg='green')} Removed: {name}")
    click.echo(f"   From: {scope} ({location.source.as_posix()})")
    return location


def manage_skills(working_dir: Path, home: Path, prompter: Prompter, fs: FileSystem = LOCAL_FS) -> list[str]:
    """Multi-select installed skills and remove the chosen ones."""
    skills = _sorted(find_all_skills(working_dir, home, fs))
    if not skills:
        click.echo("No skills installed.")
        return []

    choices = [Choice(value=s.name, label=f"{s.name} ({s.location})") for s in skills]
    to_remove = prompter.select("Select skills to remove", choices)
    if not to_remove:
        click.secho("No skills selected for removal.", fg="yellow")
        return []

    removed = []
    for name in to_remove:
        location = find_skill(name, working_dir, home, fs)
        if location is None:
            continue
        _delete(location)
        removed.append(name)
        click.echo(f"{click.style('✓', fg='green')} Removed: {name} ({skill_scope(location.source, working_dir)})")

    click.secho(f"\n✓ Removed {len(removed)} skill(s)", fg="green")
    return removed
