"""Entry point wiring validation, per-scope compilation and merging."""

from __future__ import annotations

from typing import Callable, Optional

from .compiler.base import CompileOptions, Compiler
from .compiler.libsass import LibsassCompiler
from .compiler.scoped import ScopedCompiler
from .config import ScopedSassConfig
from .css.scoper import SelectorScoper
from .css.segmenter import FragmentSegmenter
from .errors import InvalidScopeSpec
from .filesystem import FileSystem, LocalFileSystem
from .logging import get_logger, log_diagnostics
from .merge import ScopeMerger
from .models import MergeResult
from .scopes.validator import ScopeSetValidator
from .scopes.variables import VariableContentLoader

ErrorReporter = Callable[[InvalidScopeSpec], None]


class ScopedSassPipeline:
    """Compiles one stylesheet once per scope and merges the scoped copies."""

    def __init__(
        self,
        compiler: Compiler | None = None,
        *,
        filesystem: FileSystem | None = None,
        options: CompileOptions | None = None,
        verify_structure: bool = True,
        max_workers: Optional[int] = None,
        reporter: ErrorReporter | None = None,
    ) -> None:
        self.compiler = compiler or LibsassCompiler()
        self.filesystem = filesystem or LocalFileSystem()
        self.options = options or CompileOptions()
        self.max_workers = max_workers
        self.reporter = reporter
        self.validator = ScopeSetValidator(self.filesystem)
        self.loader = VariableContentLoader(self.filesystem)
        self.merger = ScopeMerger(
            FragmentSegmenter(), SelectorScoper(), verify_structure=verify_structure
        )
        self.logger = get_logger("pipeline")

    @classmethod
    def from_config(
        cls,
        config: ScopedSassConfig,
        compiler: Compiler | None = None,
        *,
        reporter: ErrorReporter | None = None,
    ) -> "ScopedSassPipeline":
        return cls(
            compiler,
            options=config.compiler.to_options(),
            verify_structure=config.merge.verify_structure,
            max_workers=config.max_workers,
            reporter=reporter,
        )

    def compile_scoped(
        self,
        source_text: str,
        scope_specs: object,
        *,
        source_path: str | None = None,
    ) -> MergeResult:
        """Return the merged multi-scope CSS for ``source_text``.

        Invalid scope specs are dropped and reported; a compile failure in any
        scope raises CompileError once every scope has finished.
        """
        report = self.validator.validate(scope_specs)
        log_diagnostics(self.logger, report.diagnostics)
        if self.reporter is not None:
            for error in report.errors():
                self.reporter(error)

        options = self.options.with_source(source_path) if source_path else self.options
        scoped_compiler = ScopedCompiler(
            self.compiler,
            self.loader,
            options=options,
            max_workers=self.max_workers,
        )
        label = source_path or "<string>"
        if report.is_fallback:
            self.logger.info("Compiling %s without scopes", label)
        else:
            self.logger.info(
                "Compiling %s for scopes: %s",
                label,
                ", ".join(spec.scope_name for spec in report.specs),
            )

        results = scoped_compiler.compile_all(source_text, report.specs)
        merged = self.merger.merge(results, report.specs)
        merged.diagnostics = list(report.diagnostics)
        return merged


def compile_scoped(
    source_text: str,
    scope_specs: object,
    *,
    compiler: Compiler | None = None,
    options: CompileOptions | None = None,
    source_path: str | None = None,
    reporter: ErrorReporter | None = None,
) -> MergeResult:
    """Compile ``source_text`` once per scope spec and merge the results."""
    pipeline = ScopedSassPipeline(compiler, options=options, reporter=reporter)
    return pipeline.compile_scoped(source_text, scope_specs, source_path=source_path)


__all__ = ["ErrorReporter", "ScopedSassPipeline", "compile_scoped"]
