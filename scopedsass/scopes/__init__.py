"""Scope spec validation and variable override loading."""

from .validator import ScopeSetValidator, ValidationReport
from .variables import VariableContentLoader, normalize_overrides

__all__ = [
    "ScopeSetValidator",
    "ValidationReport",
    "VariableContentLoader",
    "normalize_overrides",
]
