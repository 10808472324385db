"""Multi-scope Sass compilation: one stylesheet, one scoped copy per theme."""

from .errors import CompileError, InvalidScopeSpec, ScopeCompileError, StructuralMismatchError
from .models import MergeResult, ScopeSpec
from .pipeline import ScopedSassPipeline, compile_scoped

__version__ = "0.1.0"

__all__ = [
    "CompileError",
    "InvalidScopeSpec",
    "MergeResult",
    "ScopeCompileError",
    "ScopeSpec",
    "ScopedSassPipeline",
    "StructuralMismatchError",
    "compile_scoped",
]
