"""CLI interface for openskills."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

import click

from openskills.config import DEFAULT_MANIFEST, home_dir
from openskills.errors import OpenSkillsError
from openskills.version import resolve_version


class _UsageExitsOne:
    """Report usage errors with exit status 1 like every other failure."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise


class SkillsCommand(_UsageExitsOne, click.Command):
    pass


class SkillsGroup(_UsageExitsOne, click.Group):
    command_class = SkillsCommand

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except OpenSkillsError as exc:
            click.secho(f"Error: {exc}", fg="red", err=True)
            if exc.hint:
                click.echo(f"\n{exc.hint}", err=True)
            raise SystemExit(1) from None

    return wrapper


def _interactive_prompter(yes: bool = False):
    from openskills.prompts import AutoPrompter, InteractivePrompter

    return AutoPrompter() if yes else InteractivePrompter()


@click.group(cls=SkillsGroup, invoke_without_command=True)
@click.version_option(version=resolve_version(), prog_name="openskills")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """Universal skills loader for AI coding agents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("source")
@click.option("--global", "-g", "is_global", is_flag=True, help="Install to the home directory instead of the project")
@click.option("--universal", "-u", is_flag=True, help="Install to .agent/skills instead of .claude/skills")
@click.option("--yes", "-y", is_flag=True, help="Skip prompts and overwrite existing skills")
@click.option("--branch", "-b", default=None, help="Branch or tag to clone")
@_handle_errors
def install(source: str, is_global: bool, universal: bool, yes: bool, branch: str | None):
    """Install skills from a local path, git URL, or owner/repo[/skill-path]."""
    from openskills.flows.install import install_skills
    from openskills.git import GitCloner
    from openskills.models import InstallOptions

    options = InstallOptions(is_global=is_global, universal=universal, yes=yes, branch=branch)
    install_skills(
        source,
        options,
        working_dir=Path.cwd(),
        home=home_dir(),
        prompter=_interactive_prompter(yes),
        cloner=GitCloner(),
    )


@main.command("list")
@_handle_errors
def list_():
    """List all installed skills."""
    from openskills.flows.manage import list_skills

    list_skills(Path.cwd(), home_dir())


@main.command()
@click.argument("skill_name")
@_handle_errors
def read(skill_name: str):
    """Read a skill's SKILL.md to stdout (for AI agents)."""
    from openskills.flows.manage import read_skill

    read_skill(skill_name, Path.cwd(), home_dir())


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Sync every installed skill without prompting")
@click.option("--output", "-o", default=DEFAULT_MANIFEST, show_default=True, help="Markdown file to update")
@_handle_errors
def sync(yes: bool, output: str):
    """Update AGENTS.md with installed skills."""
    from openskills.flows.sync import sync_skills

    sync_skills(working_dir=Path.cwd(), home=home_dir(), output=output, yes=yes, prompter=_interactive_prompter(yes))


@main.command()
@_handle_errors
def manage():
    """Interactively manage (remove) installed skills."""
    from openskills.flows.manage import manage_skills

    manage_skills(Path.cwd(), home_dir(), _interactive_prompter())


@main.command()
@click.argument("skill_name")
@_handle_errors
def remove(skill_name: str):
    """Remove a specific skill."""
    from openskills.flows.manage import remove_skill

    remove_skill(skill_name, Path.cwd(), home_dir())


main.add_command(remove, name="rm")


@main.command()
def version():
    """Show version information."""
    click.echo(resolve_version())


@main.command("help")
@click.pass_context
def help_(ctx: click.Context):
    """Show this message."""
    click.echo(ctx.parent.get_help())


if __name__ == "__main__":
    main()
