"""Filesystem capability used by skill discovery."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    def list_dir(self, path: Path) -> list[Path]:
        """Entries of a directory. Raises OSError if it cannot be read."""
        ...

    def is_dir(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...


class LocalFileSystem:
    """pathlib-backed FileSystem. Symlinks are followed, so a link to a directory is a directory."""

    def list_dir(self, path: Path) -> list[Path]:
        return list(path.iterdir())

    def is_dir(self, path: Path) -> bool:
        try:
            return path.is_dir()
        except OSError:
            return False

    def is_file(self, path: Path) -> bool:
        try:
            return path.is_file()
        except OSError:
            return False

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8", errors="replace")


LOCAL_FS = LocalFileSystem()
