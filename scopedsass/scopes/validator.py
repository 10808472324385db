"""Validation of requested scope specs against the filesystem."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from ..errors import InvalidScopeSpec
from ..filesystem import FileSystem, LocalFileSystem
from ..logging import get_logger
from ..models import ScopeDiagnostic, ScopeSpec


@dataclass
class ValidationReport:
    """Scope specs that passed validation plus diagnostics for dropped ones."""

    specs: List[ScopeSpec]
    diagnostics: List[ScopeDiagnostic] = field(default_factory=list)

    @property
    def is_fallback(self) -> bool:
        return len(self.specs) == 1 and not self.specs[0].scope_name

    def errors(self) -> List[InvalidScopeSpec]:
        """Return the diagnostics as exceptions suitable for an error reporter."""
        return [
            InvalidScopeSpec(item.message, scope_name=item.scope_name, path=item.path)
            for item in self.diagnostics
        ]


class ScopeSetValidator:
    """Filters scope specs down to those whose variable files exist.

    Invalid specs are dropped and described in the returned report; a bad
    spec never stops the remaining ones from being checked.
    """

    def __init__(self, filesystem: FileSystem | None = None) -> None:
        self.filesystem = filesystem or LocalFileSystem()
        self.logger = get_logger("scopes.validator")

    def validate(self, scope_specs: object) -> ValidationReport:
        if not _is_sequence(scope_specs):
            return ValidationReport(specs=[ScopeSpec.unscoped()])

        valid: List[ScopeSpec] = []
        diagnostics: List[ScopeDiagnostic] = []
        seen_names: set[str] = set()
        for raw in scope_specs:  # type: ignore[union-attr]
            spec, problems = self._check(raw)
            diagnostics.extend(problems)
            if spec is None:
                continue
            if spec.scope_name in seen_names:
                self.logger.warning("Scope name %s is configured more than once", spec.scope_name)
            seen_names.add(spec.scope_name)
            valid.append(spec)

        if not valid:
            self.logger.debug("No valid scopes remain; compiling without scoping")
            valid = [ScopeSpec.unscoped()]
        return ValidationReport(specs=valid, diagnostics=diagnostics)

    def _check(self, raw: object) -> tuple[Optional[ScopeSpec], List[ScopeDiagnostic]]:
        name, path = _unpack(raw)
        if not isinstance(name, str) or not name:
            return None, [ScopeDiagnostic(scope_name="", message="Not found scopeName in scope spec")]

        if _is_sequence(path):
            problems = [
                ScopeDiagnostic(
                    scope_name=name,
                    message=f"Not found path: {item} in scope spec",
                    path=str(item) if item is not None else None,
                )
                for item in path  # type: ignore[union-attr]
                if not isinstance(item, str) or not item or not self.filesystem.exists(item)
            ]
            if problems:
                return None, problems
            return ScopeSpec(scope_name=name, path=tuple(path)), []  # type: ignore[arg-type]

        if not isinstance(path, str) or not path or not self.filesystem.exists(path):
            return None, [
                ScopeDiagnostic(
                    scope_name=name,
                    message=f"Not found path: {path} in scope spec",
                    path=path if isinstance(path, str) else None,
                )
            ]
        return ScopeSpec(scope_name=name, path=path), []


def _unpack(raw: object) -> tuple[Any, Any]:
    if isinstance(raw, ScopeSpec):
        return raw.scope_name, raw.path
    if isinstance(raw, Mapping):
        name = raw.get("scope_name", raw.get("scopeName"))
        return name, raw.get("path")
    return None, None


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


__all__ = ["ScopeSetValidator", "ValidationReport"]
