"""Compiler collaborators and the per-scope compile driver."""

from .base import OUTPUT_STYLES, CompileOptions, Compiler
from .libsass import LibsassCompiler
from .scoped import ScopedCompiler, ScopeInput

__all__ = [
    "CompileOptions",
    "Compiler",
    "LibsassCompiler",
    "OUTPUT_STYLES",
    "ScopeInput",
    "ScopedCompiler",
]
