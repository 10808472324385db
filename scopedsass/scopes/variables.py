"""Loading and normalisation of per-scope variable override files."""

from __future__ import annotations

import re
from typing import Sequence, Union

from ..filesystem import FileSystem, LocalFileSystem

# Less files declare variables with ``@``; the rewrite is purely textual, so an
# ``@`` inside a comment or string is rewritten too.
_LESS_SUFFIX = re.compile(r"\.less$", re.IGNORECASE)
_DEFAULT_FLAG = "!default"


class VariableContentLoader:
    """Turns one or more variable files into override text for a compile pass."""

    def __init__(self, filesystem: FileSystem | None = None) -> None:
        self.filesystem = filesystem or LocalFileSystem()

    def load(self, path: Union[str, Sequence[str], None]) -> str:
        if not path:
            return ""
        if isinstance(path, str):
            return self._load_one(path)
        return "\n".join(self._load_one(item) for item in path if item)

    def _load_one(self, path: str) -> str:
        text = self.filesystem.read_text(path)
        return normalize_overrides(text, foreign_dialect=bool(_LESS_SUFFIX.search(path)))


def normalize_overrides(text: str, *, foreign_dialect: bool = False) -> str:
    """Make every declaration in ``text`` an unconditional ``$`` override."""
    if foreign_dialect:
        text = text.replace("@", "$")
    return text.replace(_DEFAULT_FLAG, "")


__all__ = ["VariableContentLoader", "normalize_overrides"]
