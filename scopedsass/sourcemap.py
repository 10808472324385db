"""Source map clean-up for the host that writes compiled output."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any, Dict, Union

_ABSOLUTE_SCHEME = re.compile(r"^[A-Za-z0-9+\-.]+:")
_NATIVE_WIN32_PATH = re.compile(r"^[a-z]:[/\\]|^\\\\", re.IGNORECASE)


def url_type(source: str) -> str:
    """Classify a source-map ``sources`` entry."""
    if source.startswith("//"):
        return "scheme-relative"
    if source.startswith("/") or _NATIVE_WIN32_PATH.match(source):
        return "path-absolute"
    if _ABSOLUTE_SCHEME.match(source):
        return "absolute"
    return "path-relative"


def normalize_source_map(source_map: Union[str, Dict[str, Any]], root: Path) -> Dict[str, Any]:
    """Drop ``file``, empty ``sourceRoot`` and anchor relative sources at ``root``."""
    data = json.loads(source_map) if isinstance(source_map, str) else dict(source_map)
    data.pop("file", None)
    data["sourceRoot"] = ""
    data["sources"] = [
        os.path.normpath(os.path.join(root, source)) if url_type(source) == "path-relative" else source
        for source in data.get("sources", [])
    ]
    return data


__all__ = ["normalize_source_map", "url_type"]
