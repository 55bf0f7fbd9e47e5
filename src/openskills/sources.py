"""Classify install sources: local path, git URL, or GitHub shorthand."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Literal

from openskills.errors import SourceFormatError

SourceKind = Literal["local", "git"]

_LOCAL_PREFIXES = ("/", "./", "../", "~/")
_GIT_URL_PREFIXES = ("git@", "git://", "http://", "https://")
GITHUB_BASE_URL = "https://github.com"
SOURCE_FORMAT_HINT = "Expected: owner/repo, owner/repo/skill-name, git URL, or local path"


@dataclass(frozen=True)
class SkillSource:
    kind: SourceKind
    raw: str
    local_path: Path | None = None
    clone_url: str | None = None
    subpath: str = ""

    @property
    def is_local(self) -> bool:
        return self.kind == "local"

    @property
    def repo_name(self) -> str:
        """Repository name from the clone URL (`owner/repo.git` -> `repo`)."""
        if self.local_path is not None:
            return self.local_path.name
        tail = (self.clone_url or "").rstrip("/").replace(":", "/").rsplit("/", 1)[-1]
        return tail.removesuffix(".git")


def is_local_path(source: str) -> bool:
    return source.startswith(_LOCAL_PREFIXES)


def is_git_url(source: str) -> bool:
    return source.startswith(_GIT_URL_PREFIXES) or source.endswith(".git")


def expand_local_path(source: str, *, working_dir: Path, home: Path) -> Path:
    if source.startswith("~/"):
        return (home / source[2:]).resolve()
    return (working_dir / source).resolve()


def resolve_source(source: str, *, working_dir: Path, home: Path) -> SkillSource:
    """Classify a source string without touching the network.

    Raises SourceFormatError for shorthand with fewer than two segments.
    """
    if is_local_path(source):
        return SkillSource(
            kind="local", raw=source, local_path=expand_local_path(source, working_dir=working_dir, home=home)
        )

    if is_git_url(source):
        return SkillSource(kind="git", raw=source, clone_url=source)

    parts = source.split("/")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise SourceFormatError(f"Invalid source format: {source}", hint=SOURCE_FORMAT_HINT)

    owner, repo = parts[0], parts[1]
    subpath = "/".join(parts[2:])
    return SkillSource(
        kind="git",
        raw=source,
        clone_url=f"{GITHUB_BASE_URL}/{owner}/{repo}",
        subpath=str(PurePosixPath(subpath)) if subpath.strip("/") else "",
    )
