"""Value types shared by the discovery, install and sync flows."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

SkillScope = Literal["project", "global"]


@dataclass(frozen=True)
class Skill:
    name: str
    description: str
    location: SkillScope
    path: str  # skill directory, forward slashes


@dataclass(frozen=True)
class SkillLocation:
    path: Path  # SKILL.md
    base_dir: Path
    source: Path  # search directory the skill was found under

    def __post_init__(self):
        if self.path.parent != self.base_dir:
            raise ValueError(f"base_dir {self.base_dir} is not the parent of {self.path}")


@dataclass(frozen=True)
class SkillMetadata:
    name: str
    description: str
    context: str | None = None


@dataclass(frozen=True)
class InstallOptions:
    is_global: bool = False
    universal: bool = False
    yes: bool = False
    branch: str | None = None


@dataclass(frozen=True)
class SkillCandidate:
    name: str
    source_dir: Path
    description: str
    target_path: Path


@dataclass
class InstallReport:
    installed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
