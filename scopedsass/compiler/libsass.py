"""Compiler backed by libsass (the ``sass`` module)."""

from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import sass

from ..errors import CompileError
from ..logging import get_logger
from ..models import CompileOutput
from .base import CompileOptions

_LOCATION_PATTERN = re.compile(r"on line (\d+)(?::(\d+))? of ([^\s,]+)")
_PASSTHROUGH_PREFIXES = ("http://", "https://", "//", "url(")
_PARTIAL_EXTENSIONS = (".scss", ".sass", ".css")
_STDIN = "stdin"


class LibsassCompiler:
    """Compiles Sass source text with libsass and reports the files it imported."""

    def __init__(self, *, use_sass_path: bool = True) -> None:
        self.use_sass_path = use_sass_path
        self.logger = get_logger("compiler.libsass")

    def compile(self, source_text: str, options: CompileOptions) -> CompileOutput:
        include_paths = self._include_paths(options)
        base_dir = _base_dir(options.source_path)
        included: List[str] = []
        importer = _tracking_importer(base_dir, include_paths, included)
        kwargs = {
            "output_style": options.output_style,
            "include_paths": include_paths,
            "importers": [(0, importer)],
        }
        if options.precision is not None:
            kwargs["precision"] = options.precision

        try:
            if options.source_map:
                css, source_map = self._compile_with_map(source_text, options, kwargs)
            else:
                css = sass.compile(string=source_text, indented=options.use_indented_syntax, **kwargs)
                source_map = None
        except sass.CompileError as exc:
            raise _translate_error(exc) from exc

        self.logger.debug("libsass produced %d bytes, %d imported files", len(css), len(included))
        return CompileOutput(css=css, source_map=source_map, included_files=included)

    def _compile_with_map(
        self, source_text: str, options: CompileOptions, kwargs: dict
    ) -> tuple[str, str]:
        # libsass only emits maps in filename mode, so the source goes through a temp file.
        suffix = ".sass" if options.use_indented_syntax else ".scss"
        with tempfile.TemporaryDirectory(prefix="scopedsass-") as workdir:
            entry = Path(workdir) / f"{_STDIN}{suffix}"
            entry.write_text(source_text, encoding="utf-8")
            css, source_map = sass.compile(
                filename=str(entry),
                source_map_filename=str(Path(workdir) / "style.css.map"),
                source_map_contents=True,
                omit_source_map_url=True,
                **kwargs,
            )
            source_map = _anchor_sources(source_map, workdir, str(entry), options.source_path)
        return css, source_map

    def _include_paths(self, options: CompileOptions) -> List[str]:
        paths: List[str] = []
        base_dir = _base_dir(options.source_path)
        if base_dir:
            paths.append(base_dir)
        paths.append(os.getcwd())
        for item in options.include_paths:
            paths.append(item if os.path.isabs(item) else os.path.join(os.getcwd(), item))
        if self.use_sass_path and os.environ.get("SASS_PATH"):
            paths.extend(p for p in os.environ["SASS_PATH"].split(os.pathsep) if p)
        deduped: List[str] = []
        for path in paths:
            if path not in deduped:
                deduped.append(path)
        return deduped


def candidate_paths(request: str) -> List[str]:
    """Return the file names Sass would try for an ``@import`` request, in order."""
    if request.startswith(_PASSTHROUGH_PREFIXES):
        return []
    ext = os.path.splitext(request)[1].lower()
    if ext == ".css":
        return []
    dirname, basename = os.path.split(request)
    if ext in (".scss", ".sass"):
        names = [f"_{basename}", basename]
    else:
        names = [f"{prefix}{basename}{suffix}" for suffix in _PARTIAL_EXTENSIONS for prefix in ("_", "")]
        names.extend(
            os.path.join(basename, f"{index}{suffix}")
            for index in ("_index", "index")
            for suffix in (".scss", ".sass")
        )
    return [os.path.join(dirname, name) if dirname else name for name in names]


def _tracking_importer(
    base_dir: Optional[str], include_paths: Sequence[str], included: List[str]
) -> Callable[[str, str], Optional[list]]:
    def _import(path: str, prev: str) -> Optional[list]:
        candidates = candidate_paths(path)
        if not candidates:
            return None
        if prev and os.path.isabs(prev) and Path(prev).stem != _STDIN:
            roots = [os.path.dirname(prev), *include_paths]
        else:
            roots = [base_dir, *include_paths] if base_dir else list(include_paths)
        for root in roots:
            for candidate in candidates:
                resolved = os.path.normpath(os.path.join(root, candidate))
                if os.path.isfile(resolved):
                    included.append(resolved)
                    return [(resolved, Path(resolved).read_text(encoding="utf-8"))]
        return None

    return _import


def _translate_error(exc: Exception) -> CompileError:
    text = str(exc).strip()
    first_line = text.splitlines()[0] if text else "Sass compilation failed"
    message = first_line[len("Error: "):] if first_line.startswith("Error: ") else first_line
    line = column = None
    file = None
    match = _LOCATION_PATTERN.search(text)
    if match:
        line = int(match.group(1))
        column = int(match.group(2)) if match.group(2) else None
        reported = match.group(3)
        if reported != _STDIN and Path(reported).stem != _STDIN:
            file = reported
    return CompileError(message, file=file, line=line, column=column)


def _anchor_sources(source_map: str, workdir: str, entry: str, source_path: Optional[str]) -> str:
    # Sources are written relative to the temp map location; make them absolute.
    data = json.loads(source_map)
    sources = []
    for source in data.get("sources", []):
        resolved = os.path.normpath(os.path.join(workdir, source))
        if resolved == os.path.normpath(entry):
            resolved = os.path.abspath(source_path) if source_path else _STDIN
        sources.append(resolved)
    data["sources"] = sources
    return json.dumps(data)


def _base_dir(source_path: Optional[str]) -> Optional[str]:
    if not source_path:
        return None
    return os.path.dirname(os.path.abspath(source_path))


__all__ = ["LibsassCompiler", "candidate_paths"]
