"""Exceptions raised by openskills flows. The CLI maps each one to exit status 1."""

from __future__ import annotations


class OpenSkillsError(Exception):
    """Base error. `hint` is an optional remediation shown below the message."""

    def __init__(self, message: str, hint: str | None = None):
        super().__init__(message)
        self.hint = hint


class SourceFormatError(OpenSkillsError):
    """Malformed install source or output path."""


class SkillNotFoundError(OpenSkillsError):
    """Skill, SKILL.md, or source path does not exist."""


class InvalidSkillError(OpenSkillsError):
    """SKILL.md is missing its YAML frontmatter."""


class PathTraversalError(OpenSkillsError):
    """Resolved install path escapes the target skills directory."""


class CloneError(OpenSkillsError):
    """git clone failed and left no usable checkout."""


class SelectionCancelled(OpenSkillsError):
    """An interactive prompt was aborted."""


class InstallError(OpenSkillsError):
    """Copying a skill into the target directory failed."""


class ConfigError(OpenSkillsError):
    """An OPENSKILLS_* environment variable holds an unusable value."""
