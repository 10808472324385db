"""A tiny stand-in for libsass covering variable declarations and substitution."""

from __future__ import annotations

import re
import threading
import time
from typing import Dict, List, Mapping, Sequence, Tuple

from scopedsass.compiler.base import CompileOptions
from scopedsass.errors import CompileError
from scopedsass.models import CompileOutput

_DECLARATION = re.compile(r"\$([\w-]+)\s*:\s*([^;]*?)\s*(!default)?\s*;")
_REFERENCE = re.compile(r"\$([\w-]+)")


class FakeSassCompiler:
    """Resolves ``$name: value;`` declarations with Sass precedence rules.

    Later declarations win unless flagged ``!default``. ``delays`` maps a
    marker substring to seconds to sleep, which lets tests force a
    completion order that differs from submission order.
    """

    def __init__(
        self,
        *,
        included_files: Sequence[str] = (),
        delays: Mapping[str, float] | None = None,
        errors: Sequence[str] = (),
    ) -> None:
        self.included_files = list(included_files)
        self.delays = dict(delays or {})
        self.errors = list(errors)
        self.calls: List[Tuple[str, CompileOptions]] = []
        self.completed: List[str] = []
        self._lock = threading.Lock()

    def compile(self, source_text: str, options: CompileOptions) -> CompileOutput:
        with self._lock:
            self.calls.append((source_text, options))
        for marker, seconds in self.delays.items():
            if marker in source_text:
                time.sleep(seconds)

        variables: Dict[str, str] = {}

        def _declare(match: re.Match[str]) -> str:
            name, value, default = match.groups()
            if not (default and name in variables):
                variables[name] = value
            return ""

        body = _DECLARATION.sub(_declare, source_text)

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in variables:
                line = body[: match.start()].count("\n") + 1
                raise CompileError(f'Undefined variable: "${name}".', line=line, column=match.start() + 1)
            return variables[name]

        css = _REFERENCE.sub(_substitute, body).strip() + "\n"
        with self._lock:
            self.completed.append(css)
        return CompileOutput(css=css, included_files=list(self.included_files), errors=list(self.errors))


__all__ = ["FakeSassCompiler"]
