"""Sync installed skills into the skills section of a markdown manifest (AGENTS.md)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import click

from openskills.config import DEFAULT_MANIFEST
from openskills.discovery import find_all_skills
from openskills.errors import SourceFormatError
from openskills.fs import LOCAL_FS, FileSystem
from openskills.manifest import (
    generate_skills_xml,
    has_skills_section,
    parse_current_skills,
    remove_skills_section,
    replace_skills_section,
)
from openskills.prompts import AutoPrompter, Choice, Prompter

logger = logging.getLogger(__name__)

SyncAction = Literal["none", "removed", "synced", "added"]


@dataclass(frozen=True)
class SyncResult:
    path: Path
    count: int
    action: SyncAction


def ensure_manifest(output_path: Path) -> bool:
    """Create the manifest with a `# <title>` header if missing. Returns True when created."""
    if output_path.exists():
        return False
    output_path.parent.mkdir(parents=True, exist_ok=True)
    title = output_path.name.removesuffix(".md")
    output_path.write_text(f"# {title}\n\n", encoding="utf-8")
    return True


def sync_skills(
    *,
    working_dir: Path,
    home: Path,
    output: str = DEFAULT_MANIFEST,
    yes: bool = False,
    prompter: Prompter | None = None,
    fs: FileSystem = LOCAL_FS,
) -> SyncResult:
    """Write the installed skills into the manifest's skills section.

    Interactive unless `yes`: project skills and global skills already listed in
    the manifest start selected. Deselecting everything removes the section.
    """
    if not output.endswith(".md"):
        raise SourceFormatError("Output file must be a markdown file (.md)")

    prompter = prompter or AutoPrompter()
    output_path = working_dir / output
    output_name = output_path.name

    if ensure_manifest(output_path):
        click.secho(f"Created {output}", dim=True)

    skills = find_all_skills(working_dir, home, fs)
    if not skills:
        click.echo("No skills installed. Install skills first:")
        click.secho("  openskills install anthropics/skills", fg="cyan")
        return SyncResult(path=output_path, count=0, action="none")

    if not yes:
        current = set(parse_current_skills(output_path.read_text(encoding="utf-8")))
        ordered = sorted(skills, key=lambda s: (s.location != "project", s.name))
        choices = [
            Choice(
                value=s.name,
                label=f"{s.name} ({s.location})",
                checked=s.location == "project" or s.name in current,
            )
            for s in ordered
        ]
        selected = set(prompter.select(f"Select skills to sync to {output_name}", choices))

        if not selected:
            content = output_path.read_text(encoding="utf-8")
            output_path.write_text(remove_skills_section(content), encoding="utf-8")
            click.echo(f"{click.style('✓', fg='green')} Removed all skills from {output_name}")
            return SyncResult(path=output_path, count=0, action="removed")

        skills = [s for s in skills if s.name in selected]

    content = output_path.read_text(encoding="utf-8")
    had_section = has_skills_section(content)
    output_path.write_text(replace_skills_section(content, generate_skills_xml(skills)), encoding="utf-8")
    logger.debug("Wrote %d skill(s) to %s", len(skills), output_path)

    check = click.style("✓", fg="green")
    if had_section:
        click.echo(f"{check} Synced {len(skills)} skill(s) to {output_name}")
        return SyncResult(path=output_path, count=len(skills), action="synced")
    click.echo(f"{check} Added skills section to {output_name} ({len(skills)} skill(s))")
    return SyncResult(path=output_path, count=len(skills), action="added")
