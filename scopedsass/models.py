"""Core data models shared across scopedsass components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

ScopePath = Union[str, Tuple[str, ...]]


@dataclass(frozen=True)
class ScopeSpec:
    """One named variable-override set requested for a compilation."""

    scope_name: str
    path: ScopePath = ""

    @property
    def paths(self) -> List[str]:
        """Return the referenced variable files as a list, skipping blanks."""
        if isinstance(self.path, str):
            return [self.path] if self.path else []
        return [item for item in self.path if item]

    @classmethod
    def unscoped(cls) -> "ScopeSpec":
        """Return the fallback spec meaning "compile once, no scoping"."""
        return cls(scope_name="", path="")


@dataclass(frozen=True)
class ScopeDiagnostic:
    """Non-fatal problem found while validating a scope spec."""

    scope_name: str
    message: str
    path: Optional[str] = None


@dataclass(frozen=True)
class RuleFragment:
    """A flat ``selector-list { declarations }`` span of a compiled stylesheet."""

    text: str
    start: int
    end: int

    @property
    def selector(self) -> str:
        return self.text.split("{", 1)[0]

    @property
    def block(self) -> str:
        return self.text[len(self.selector):]


@dataclass(frozen=True)
class ScopedFragment:
    """A fragment whose selector list carries a scope class prefix."""

    text: str
    scope_name: str
    source: RuleFragment


@dataclass
class CompileOutput:
    """What a compiler returns for one source text."""

    css: str
    source_map: Optional[str] = None
    included_files: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


@dataclass
class CompiledScopeResult:
    """Compiler output for one validated scope."""

    scope: ScopeSpec
    css: str
    source_map: Optional[str] = None
    dependency_paths: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def scope_name(self) -> str:
        return self.scope.scope_name


@dataclass
class MergeResult:
    """Final artifact of a scoped compilation request."""

    css: str = ""
    source_map: Optional[str] = None
    dependency_paths: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    diagnostics: Sequence[ScopeDiagnostic] = field(default_factory=list)


__all__ = [
    "CompileOutput",
    "CompiledScopeResult",
    "MergeResult",
    "RuleFragment",
    "ScopeDiagnostic",
    "ScopePath",
    "ScopeSpec",
    "ScopedFragment",
]
