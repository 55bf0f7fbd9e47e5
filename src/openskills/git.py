"""Shallow `git clone` wrapper. Always shells out to the installed git client."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from openskills.config import clone_timeout, git_executable
from openskills.errors import CloneError

logger = logging.getLogger(__name__)

PRIVATE_REPO_HINT = "Tip: For private repos, ensure git SSH keys or credentials are configured"


@dataclass(frozen=True)
class CloneResult:
    destination: Path
    warning: str | None = None


class Cloner(Protocol):
    def clone(self, url: str, destination: Path, branch: str | None = None) -> CloneResult: ...


def is_repository_cloned(destination: Path) -> bool:
    """True if destination exists and has at least one entry."""
    return destination.is_dir() and any(destination.iterdir())


class GitCloner:
    def __init__(self, executable: str | None = None, timeout: float | None = None):
        self.executable = executable or git_executable()
        self.timeout = timeout if timeout is not None else clone_timeout()

    def command(self, url: str, destination: Path, branch: str | None = None) -> list[str]:
        cmd = [self.executable, "clone", "--depth", "1", "--quiet"]
        if branch:
            cmd += ["--branch", branch]
        return [*cmd, url, str(destination)]

    def clone(self, url: str, destination: Path, branch: str | None = None) -> CloneResult:
        """Clone url into destination (depth 1, no credential prompts).

        Some servers exit non-zero after producing a complete checkout; when the
        destination is non-empty the failure is downgraded to a warning.
        """
        cmd = self.command(url, destination, branch)
        logger.debug("Running %s", " ".join(cmd))
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, env=env, timeout=self.timeout, check=False)
        except FileNotFoundError:
            error = f"git executable not found: {self.executable}"
        except subprocess.TimeoutExpired:
            error = f"git clone timed out after {self.timeout}s"
        else:
            if proc.returncode == 0:
                return CloneResult(destination=destination)
            error = proc.stderr.strip() or f"git clone exited with status {proc.returncode}"

        if is_repository_cloned(destination):
            logger.warning("git clone of %s reported errors but produced a checkout: %s", url, error)
            return CloneResult(destination=destination, warning=error)
        raise CloneError(f"Failed to clone repository {url}: {error}", hint=PRIVATE_REPO_HINT)
