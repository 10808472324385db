"""Concurrent per-scope compilation."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..errors import CompileError, ScopeCompileError
from ..logging import get_logger
from ..models import CompiledScopeResult, ScopeSpec
from ..scopes.variables import VariableContentLoader
from .base import CompileOptions, Compiler


@dataclass(frozen=True)
class ScopeInput:
    """The exact text handed to the compiler for one scope."""

    scope: ScopeSpec
    text: str
    prefix_lines: int


class ScopedCompiler:
    """Runs one compile per scope, each seeded with that scope's overrides.

    All scopes are compiled to completion before any failure is raised, and
    results come back in scope-list order regardless of completion order.
    """

    def __init__(
        self,
        compiler: Compiler,
        loader: VariableContentLoader | None = None,
        *,
        options: CompileOptions | None = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self.compiler = compiler
        self.loader = loader or VariableContentLoader()
        self.options = options or CompileOptions()
        self.max_workers = max_workers
        self.logger = get_logger("compiler.scoped")

    def build_input(self, source_text: str, scope: ScopeSpec) -> ScopeInput:
        """Prepend the scope's override text (and any additional data) to the source."""
        prefix = self.loader.load(scope.path)
        if self.options.additional_data:
            prefix = f"{prefix}\n{self.options.additional_data}"
        return ScopeInput(
            scope=scope,
            text=f"{prefix}\n{source_text}",
            prefix_lines=prefix.count("\n") + 1,
        )

    def compile_all(self, source_text: str, scopes: Sequence[ScopeSpec]) -> List[CompiledScopeResult]:
        if not scopes:
            return []
        workers = self.max_workers or len(scopes)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="scopedsass") as pool:
            futures: List[Future[CompiledScopeResult]] = [
                pool.submit(self._compile_scope, source_text, scope) for scope in scopes
            ]
            wait(futures)

        results: List[CompiledScopeResult] = []
        failures: List[CompileError] = []
        unexpected: Optional[BaseException] = None
        for scope, future in zip(scopes, futures):
            exc = future.exception()
            if exc is None:
                results.append(future.result())
            elif isinstance(exc, CompileError):
                self.logger.debug("Scope %s failed: %s", scope.scope_name or "<unscoped>", exc)
                failures.append(exc)
            elif unexpected is None:
                unexpected = exc

        if unexpected is not None:
            # Other scopes' compile failures are kept as the cause.
            if failures:
                raise unexpected from ScopeCompileError(failures)
            raise unexpected
        if failures:
            raise ScopeCompileError(failures)
        return results

    def _compile_scope(self, source_text: str, scope: ScopeSpec) -> CompiledScopeResult:
        label = scope.scope_name or "<unscoped>"
        scope_input = self.build_input(source_text, scope)
        self.logger.debug("Compiling scope %s (%d override lines)", label, scope_input.prefix_lines)
        try:
            output = self.compiler.compile(scope_input.text, self.options)
        except CompileError as exc:
            raise self._relocate(exc, scope_input) from exc
        self.logger.debug("Scope %s compiled", label)
        return CompiledScopeResult(
            scope=scope,
            css=output.css,
            source_map=output.source_map,
            dependency_paths=list(output.included_files),
            errors=list(output.errors),
        )

    def _relocate(self, exc: CompileError, scope_input: ScopeInput) -> CompileError:
        # Errors in the combined text point past the prepended overrides.
        error = exc.for_scope(scope_input.scope.scope_name)
        if error.file is None:
            if error.line is not None and error.line > scope_input.prefix_lines:
                error.line -= scope_input.prefix_lines
                error.file = self.options.source_path
            elif error.line is not None:
                error.file = _first_path(scope_input.scope)
            else:
                error.file = self.options.source_path
        return error


def _first_path(scope: ScopeSpec) -> Optional[str]:
    paths = scope.paths
    return paths[0] if paths else None


__all__ = ["ScopeInput", "ScopedCompiler"]
