"""Read-only filesystem access used for scope validation and variable loading."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """Protocol for the filesystem collaborator."""

    def exists(self, path: str) -> bool:
        """Return True when ``path`` refers to an existing file."""

    def read_text(self, path: str) -> str:
        """Return the decoded contents of ``path``."""


class LocalFileSystem:
    """FileSystem implementation backed by the local disk."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def exists(self, path: str) -> bool:
        return bool(path) and Path(path).expanduser().is_file()

    def read_text(self, path: str) -> str:
        return Path(path).expanduser().read_text(encoding=self.encoding)


__all__ = ["FileSystem", "LocalFileSystem"]
