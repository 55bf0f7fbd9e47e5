"""Skill installation: resolve source, clone, discover, validate, resolve conflicts, copy."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

import click

from openskills.config import MARKETPLACE_SKILLS, SKILL_FILENAME, skill_folder, skills_dir
from openskills.discovery import find_skills
from openskills.errors import InstallError, InvalidSkillError, PathTraversalError, SkillNotFoundError
from openskills.frontmatter import extract_yaml_field, has_valid_frontmatter
from openskills.fs import LOCAL_FS, FileSystem
from openskills.git import Cloner, GitCloner
from openskills.models import InstallOptions, InstallReport, SkillCandidate
from openskills.prompts import AutoPrompter, Choice, Prompter
from openskills.sources import resolve_source

logger = logging.getLogger(__name__)

CURSOR_DIR_NAME = ".cursor"


def is_within(path: Path, root: Path) -> bool:
    """True if path resolves to a strict descendant of root."""
    resolved = path.resolve()
    resolved_root = root.resolve()
    return resolved != resolved_root and resolved.is_relative_to(resolved_root)


def copy_skill_dir(source_dir: Path, target_path: Path, include_cursor: bool = False) -> None:
    """Recursively copy a skill, overwriting files. Nested .cursor folders are left out unless asked for."""
    ignore = None if include_cursor else shutil.ignore_patterns(CURSOR_DIR_NAME)
    shutil.copytree(source_dir, target_path, ignore=ignore, dirs_exist_ok=True)


def is_same_dir(a: Path, b: Path) -> bool:
    """True if both paths resolve to the same directory."""
    return a.resolve() == b.resolve()


def _warn_marketplace(name: str, report: InstallReport) -> None:
    click.secho(f"\n⚠️  Warning: '{name}' matches an Anthropic marketplace skill", fg="yellow")
    click.secho("   Installing globally may conflict with Claude Code plugins.", dim=True)
    click.secho("   If you re-enable Claude plugins, this will be overwritten.", dim=True)
    click.secho("   Recommend: install without --global for conflict-free installation.\n", dim=True)
    report.warnings.append(f"marketplace conflict: {name}")


class SkillInstaller:
    """One install invocation over an injected prompter, cloner and filesystem."""

    def __init__(
        self,
        options: InstallOptions,
        *,
        working_dir: Path,
        home: Path,
        prompter: Prompter | None = None,
        cloner: Cloner | None = None,
        fs: FileSystem = LOCAL_FS,
    ):
        self.options = options
        self.working_dir = working_dir
        self.home = home
        self.prompter = prompter or AutoPrompter()
        self.cloner = cloner or GitCloner()
        self.fs = fs
        self.target_dir = skills_dir(working_dir, home, is_global=options.is_global, universal=options.universal)
        self.report = InstallReport()

    @property
    def is_project(self) -> bool:
        return not self.options.is_global

    def run(self, source: str) -> InstallReport:
        folder = skill_folder(self.options.universal)
        location = f"project ({folder})" if self.is_project else f"global (~/{folder})"
        click.echo(f"Installing from: {click.style(source, fg='cyan')}")
        click.echo(f"Location: {location}\n")

        resolved = resolve_source(source, working_dir=self.working_dir, home=self.home)
        if resolved.is_local:
            self._install_from_local(resolved.local_path)
        else:
            with tempfile.TemporaryDirectory(prefix="openskills-") as tmp:
                repo_dir = Path(tmp) / "repo"
                click.secho("Cloning repository...", dim=True)
                result = self.cloner.clone(resolved.clone_url, repo_dir, branch=self.options.branch)
                if result.warning:
                    click.secho(
                        "Warning: Git clone reported errors, but repository appears to be cloned successfully.",
                        fg="yellow",
                    )
                    click.secho(result.warning, dim=True)
                    self.report.warnings.append(result.warning)

                if resolved.subpath:
                    self._install_subpath(repo_dir, resolved.subpath)
                elif self.fs.is_file(repo_dir / SKILL_FILENAME):
                    self._install_single(repo_dir, resolved.repo_name)
                else:
                    self._install_from_repo(repo_dir)

        click.secho("\nRead skill: ", dim=True, nl=False)
        click.secho("openskills read <skill-name>", fg="cyan")
        if self.is_project:
            click.secho("Sync to AGENTS.md: ", dim=True, nl=False)
            click.secho("openskills sync", fg="cyan")
        return self.report

    def _install_from_local(self, local_path: Path) -> None:
        if not self.fs.is_dir(local_path):
            raise SkillNotFoundError(f"Path does not exist or is not a directory: {local_path}")
        if self.fs.is_file(local_path / SKILL_FILENAME):
            self._install_single(local_path, local_path.name)
        else:
            self._install_from_repo(local_path)

    def _install_subpath(self, repo_dir: Path, subpath: str) -> None:
        skill_dir = repo_dir / subpath
        if not is_within(skill_dir, repo_dir):
            raise PathTraversalError(f"Skill path escapes the repository: {subpath}")
        if not self.fs.is_file(skill_dir / SKILL_FILENAME):
            raise SkillNotFoundError(f"SKILL.md not found at {subpath}")
        self._install_single(skill_dir, Path(subpath).name)

    def _install_single(self, skill_dir: Path, name: str) -> None:
        content = self.fs.read_text(skill_dir / SKILL_FILENAME)
        if not has_valid_frontmatter(content):
            raise InvalidSkillError("Invalid SKILL.md (missing YAML frontmatter)")

        candidate = SkillCandidate(
            name=name,
            source_dir=skill_dir,
            description=extract_yaml_field(content, "description"),
            target_path=self.target_dir / name,
        )
        if is_same_dir(skill_dir, candidate.target_path):
            click.secho(f"Already installed: {name}", dim=True)
            self.report.skipped.append(name)
            return
        if not self._confirm_overwrite(candidate):
            return
        if self.options.is_global and name in MARKETPLACE_SKILLS:
            _warn_marketplace(name, self.report)
        if not is_within(candidate.target_path, self.target_dir):
            raise PathTraversalError(f"Security error: Installation path outside target directory ({name})")
        self._copy(candidate)
        click.echo(f"   Location: {candidate.target_path}")

    def _install_from_repo(self, repo_dir: Path) -> None:
        repo_cursor = repo_dir / CURSOR_DIR_NAME
        copy_cursor = False
        if self.fs.is_dir(repo_cursor):
            copy_cursor = self.options.yes or self.prompter.confirm(
                "Repository contains .cursor folder in root. Copy to project root?", default=False
            )

        skill_dirs = find_skills(repo_dir, self.fs)
        if not skill_dirs:
            raise SkillNotFoundError("No SKILL.md files found in repository")
        click.secho(f"Found {len(skill_dirs)} skill(s)\n", dim=True)

        candidates = self._valid_candidates(skill_dirs)
        if not candidates:
            raise SkillNotFoundError("No valid SKILL.md files found")

        if not self.options.yes and len(candidates) > 1:
            candidates = self._select(candidates)
            if not candidates:
                click.secho("No skills selected. Installation cancelled.", fg="yellow")
                return

        installed = 0
        for candidate in candidates:
            if not self._confirm_overwrite(candidate):
                continue
            if self.options.is_global and candidate.name in MARKETPLACE_SKILLS:
                _warn_marketplace(candidate.name, self.report)
            if not is_within(candidate.target_path, self.target_dir):
                click.secho(
                    f"Security error: Installation path outside target directory, skipping {candidate.name}",
                    fg="red",
                    err=True,
                )
                self.report.skipped.append(candidate.name)
                continue
            self._copy(candidate)
            installed += 1

        click.secho(f"\n✓ Installation complete: {installed} skill(s) installed", fg="green")

        if copy_cursor:
            self._copy_repo_cursor(repo_cursor)

    def _valid_candidates(self, skill_dirs: list[Path]) -> list[SkillCandidate]:
        candidates = []
        for skill_dir in skill_dirs:
            try:
                content = self.fs.read_text(skill_dir / SKILL_FILENAME)
            except OSError:
                logger.debug("Cannot read %s, skipping", skill_dir, exc_info=True)
                continue
            if not has_valid_frontmatter(content):
                logger.debug("Dropping %s: SKILL.md has no frontmatter", skill_dir)
                continue
            if is_same_dir(skill_dir, self.target_dir / skill_dir.name):
                logger.debug("Skipping %s: already installed in place", skill_dir)
                continue
            candidates.append(
                SkillCandidate(
                    name=skill_dir.name,
                    source_dir=skill_dir,
                    description=extract_yaml_field(content, "description"),
                    target_path=self.target_dir / skill_dir.name,
                )
            )
        return candidates

    def _select(self, candidates: list[SkillCandidate]) -> list[SkillCandidate]:
        choices = [
            Choice(
                value=c.name,
                label=f"{c.name} - {c.description}" if c.description else c.name,
                checked=self.fs.is_dir(c.target_path),
            )
            for c in candidates
        ]
        selected = set(self.prompter.select("Select skills to install", choices))
        return [c for c in candidates if c.name in selected]

    def _confirm_overwrite(self, candidate: SkillCandidate) -> bool:
        if not self.fs.is_dir(candidate.target_path):
            return True
        if self.options.yes:
            click.secho(f"Overwriting: {candidate.name}", dim=True)
            return True
        if self.prompter.confirm(f"Skill '{candidate.name}' already exists. Overwrite?", default=False):
            return True
        click.secho(f"Skipped: {candidate.name}", fg="yellow")
        self.report.skipped.append(candidate.name)
        return False

    def _copy(self, candidate: SkillCandidate) -> None:
        try:
            self.target_dir.mkdir(parents=True, exist_ok=True)
            copy_skill_dir(candidate.source_dir, candidate.target_path)
        except OSError as exc:
            raise InstallError(f"Failed to install {candidate.name}: {exc}") from exc
        logger.info("Installed %s -> %s", candidate.name, candidate.target_path)
        click.echo(f"{click.style('✓', fg='green')} Installed: {candidate.name}")
        self.report.installed.append(candidate.name)

    def _copy_repo_cursor(self, repo_cursor: Path) -> None:
        target = self.working_dir / CURSOR_DIR_NAME
        try:
            copy_skill_dir(repo_cursor, target, include_cursor=True)
        except OSError as exc:
            logger.warning("Failed to copy %s to %s", repo_cursor, target, exc_info=True)
            click.secho(f"Warning: Failed to copy .cursor folder: {exc}", fg="yellow")
            self.report.warnings.append(f"cursor copy failed: {exc}")
            return
        click.echo(f"{click.style('✓', fg='green')} Copied .cursor folder to project root")


def install_skills(
    source: str,
    options: InstallOptions,
    *,
    working_dir: Path,
    home: Path,
    prompter: Prompter | None = None,
    cloner: Cloner | None = None,
    fs: FileSystem = LOCAL_FS,
) -> InstallReport:
    """Install skills from a local path, git URL, or owner/repo[/path] shorthand."""
    installer = SkillInstaller(options, working_dir=working_dir, home=home, prompter=prompter, cloner=cloner, fs=fs)
    return installer.run(source)
