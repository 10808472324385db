"""Exception types raised by scopedsass."""

from __future__ import annotations

from typing import List, Optional, Sequence


class InvalidScopeSpec(ValueError):
    """A scope spec is missing its name or references files that do not exist."""

    def __init__(self, message: str, *, scope_name: str = "", path: Optional[str] = None) -> None:
        super().__init__(message)
        self.scope_name = scope_name
        self.path = path


class CompileError(RuntimeError):
    """The underlying Sass compiler rejected its input."""

    def __init__(
        self,
        message: str,
        *,
        file: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        scope_name: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.file = file
        self.line = line
        self.column = column
        self.scope_name = scope_name

    def for_scope(self, scope_name: str) -> "CompileError":
        """Return a copy of this error attributed to ``scope_name``."""
        return CompileError(
            self.message,
            file=self.file,
            line=self.line,
            column=self.column,
            scope_name=scope_name,
        )

    def describe(self) -> str:
        location = self.file or "<source>"
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        prefix = f"[{self.scope_name}] " if self.scope_name else ""
        return f"{prefix}{location}: {self.message}"


class ScopeCompileError(CompileError):
    """One or more scopes failed to compile.

    The message and location mirror the first failing scope in scope-list
    order; ``failures`` holds every failing scope's error.
    """

    def __init__(self, failures: Sequence[CompileError]) -> None:
        if not failures:
            raise ValueError("ScopeCompileError requires at least one failure")
        first = failures[0]
        super().__init__(
            first.message,
            file=first.file,
            line=first.line,
            column=first.column,
            scope_name=first.scope_name,
        )
        self.failures: List[CompileError] = list(failures)

    @property
    def scope_names(self) -> List[str]:
        return [failure.scope_name or "" for failure in self.failures]


class StructuralMismatchError(RuntimeError):
    """Compiled outputs of two scopes do not share the same rule structure."""

    def __init__(self, scope_name: str, position: int, detail: str) -> None:
        super().__init__(
            f"Scope '{scope_name}' diverges from the first scope at fragment {position}: {detail}"
        )
        self.scope_name = scope_name
        self.position = position
        self.detail = detail


__all__ = [
    "CompileError",
    "InvalidScopeSpec",
    "ScopeCompileError",
    "StructuralMismatchError",
]
