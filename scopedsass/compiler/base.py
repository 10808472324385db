"""Compiler collaborator contract."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Protocol

from ..models import CompileOutput

OUTPUT_STYLES = ("nested", "expanded", "compact", "compressed")


@dataclass(frozen=True)
class CompileOptions:
    """Options handed to the compiler for every scope pass."""

    output_style: str = "expanded"
    include_paths: tuple[str, ...] = ()
    precision: Optional[int] = None
    source_map: bool = False
    indented: Optional[bool] = None
    additional_data: Optional[str] = None
    source_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.output_style not in OUTPUT_STYLES:
            raise ValueError(
                f"Unknown output style '{self.output_style}'; expected one of {', '.join(OUTPUT_STYLES)}"
            )

    @property
    def use_indented_syntax(self) -> bool:
        if self.indented is not None:
            return self.indented
        return bool(self.source_path) and Path(self.source_path).suffix.lower() == ".sass"

    def with_source(self, source_path: str | None) -> "CompileOptions":
        return replace(self, source_path=source_path)


class Compiler(Protocol):
    """Turns Sass source text into CSS, raising CompileError on invalid input."""

    def compile(self, source_text: str, options: CompileOptions) -> CompileOutput:
        ...


__all__ = ["CompileOptions", "Compiler", "OUTPUT_STYLES"]
