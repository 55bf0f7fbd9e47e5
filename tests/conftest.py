"""Shared fakes: in-memory filesystem, scripted prompter, git cloner stand-in."""

from __future__ import annotations

from pathlib import Path

import pytest

from openskills.git import CloneResult

SKILL_TEMPLATE = "---\nname: {name}\ndescription: {description}\n---\n\n# {name}\n"


def write_skill(root: Path, name: str, description: str = "", content: str | None = None) -> Path:
    """Create root/name/SKILL.md and return the skill directory."""
    skill_dir = root / name
    skill_dir.mkdir(parents=True, exist_ok=True)
    body = content if content is not None else SKILL_TEMPLATE.format(name=Path(name).name, description=description)
    (skill_dir / "SKILL.md").write_text(body)
    return skill_dir


class FakeFileSystem:
    """Dict-backed FileSystem: keys are file paths, directories are implied by their children."""

    def __init__(self, files: dict[str, str], unreadable: set[str] | None = None):
        self.files = {Path(p): c for p, c in files.items()}
        self.unreadable = {Path(p) for p in unreadable or ()}
        self.dirs: set[Path] = set()
        for path in self.files:
            self.dirs.update(path.parents)

    def list_dir(self, path: Path) -> list[Path]:
        if path in self.unreadable:
            raise PermissionError(f"permission denied: {path}")
        if path not in self.dirs:
            raise FileNotFoundError(path)
        children = {p for p in [*self.files, *self.dirs] if p.parent == path and p != path}
        return list(children)

    def is_dir(self, path: Path) -> bool:
        return path in self.dirs

    def is_file(self, path: Path) -> bool:
        return path in self.files

    def read_text(self, path: Path) -> str:
        return self.files[path]


class FakePrompter:
    """Answers prompts from scripted values and records what was asked."""

    def __init__(self, confirm: bool | list[bool] = False, select: list[str] | None = None):
        self._confirm = confirm
        self._select = select
        self.confirmations: list[str] = []
        self.selections: list[tuple[str, list]] = []

    def confirm(self, message: str, default: bool = False) -> bool:
        self.confirmations.append(message)
        if isinstance(self._confirm, list):
            return self._confirm.pop(0)
        return self._confirm

    def select(self, title, choices):
        self.selections.append((title, list(choices)))
        if self._select is None:
            return [c.value for c in choices if c.checked]
        return [c.value for c in choices if c.value in self._select]


class FakeCloner:
    """Materializes a prepared tree at the clone destination instead of running git."""

    def __init__(self, populate=None, warning: str | None = None):
        self.populate = populate
        self.warning = warning
        self.calls: list[tuple[str, Path, str | None]] = []

    def clone(self, url: str, destination: Path, branch: str | None = None) -> CloneResult:
        self.calls.append((url, destination, branch))
        destination.mkdir(parents=True)
        if self.populate:
            self.populate(destination)
        return CloneResult(destination=destination, warning=self.warning)


@pytest.fixture
def project(tmp_path):
    """A working directory and a separate home directory."""
    working_dir = tmp_path / "project"
    home = tmp_path / "home"
    working_dir.mkdir()
    home.mkdir()
    return working_dir, home
