"""Interleaving of per-scope compiled CSS into a single document."""

from __future__ import annotations

from typing import List, Sequence

from .css.scoper import SelectorScoper
from .css.segmenter import FragmentSegmenter
from .errors import StructuralMismatchError
from .logging import get_logger
from .models import CompiledScopeResult, MergeResult, RuleFragment, ScopedFragment, ScopeSpec


class ScopeMerger:
    """Builds one stylesheet holding a scoped copy of every rule for every scope.

    The first scope's fragments are the positional skeleton: fragment ``k`` of
    the base document becomes fragment ``k`` of every scope, newline-joined in
    scope order. Scopes are expected to compile to the same rules in the same
    order; with ``verify_structure`` enabled a divergence raises
    StructuralMismatchError instead of producing misaligned output.
    """

    def __init__(
        self,
        segmenter: FragmentSegmenter | None = None,
        scoper: SelectorScoper | None = None,
        *,
        verify_structure: bool = True,
    ) -> None:
        self.segmenter = segmenter or FragmentSegmenter()
        self.scoper = scoper or SelectorScoper()
        self.verify_structure = verify_structure
        self.logger = get_logger("merge")

    def merge(
        self,
        results: Sequence[CompiledScopeResult],
        scopes: Sequence[ScopeSpec] | None = None,
    ) -> MergeResult:
        if not results:
            return MergeResult()
        if scopes is None:
            scopes = [result.scope for result in results]
        if len(scopes) != len(results):
            raise ValueError(f"Got {len(results)} compiled results for {len(scopes)} scopes")

        segmented: List[List[RuleFragment]] = [self.segmenter.segment(result.css) for result in results]
        if self.verify_structure:
            self._check_alignment(segmented, scopes)

        scoped: List[List[ScopedFragment]] = [
            [self.scoper.scope(fragment, scope.scope_name) for fragment in fragments]
            for fragments, scope in zip(segmented, scopes)
        ]

        base = results[0]
        skeleton = segmented[0]
        css = _splice(base.css, skeleton, scoped)
        self.logger.debug("Merged %d fragments across %d scopes", len(skeleton), len(results))

        return MergeResult(
            css=css,
            source_map=base.source_map,
            dependency_paths=_dependencies(results, scopes),
            errors=[error for result in results for error in result.errors],
        )

    def _check_alignment(
        self, segmented: Sequence[Sequence[RuleFragment]], scopes: Sequence[ScopeSpec]
    ) -> None:
        skeleton = segmented[0]
        for fragments, scope in zip(segmented[1:], scopes[1:]):
            name = scope.scope_name
            for position, (expected, actual) in enumerate(zip(skeleton, fragments)):
                if expected.selector.strip() != actual.selector.strip():
                    raise StructuralMismatchError(
                        name,
                        position,
                        f"selector {actual.selector.strip()!r} != {expected.selector.strip()!r}",
                    )
            if len(fragments) != len(skeleton):
                raise StructuralMismatchError(
                    name,
                    min(len(fragments), len(skeleton)),
                    f"{len(fragments)} fragments, expected {len(skeleton)}",
                )


def _splice(
    document: str,
    skeleton: Sequence[RuleFragment],
    scoped: Sequence[Sequence[ScopedFragment]],
) -> str:
    """Replace each skeleton span, in source order, with its multi-scope variant."""
    if not skeleton:
        return document
    pieces: List[str] = []
    cursor = 0
    for position, fragment in enumerate(skeleton):
        pieces.append(document[cursor:fragment.start])
        variants = [group[position].text for group in scoped if position < len(group)]
        pieces.append("\n".join(variants))
        cursor = fragment.end
    pieces.append(document[cursor:])
    return "".join(pieces)


def _dependencies(
    results: Sequence[CompiledScopeResult], scopes: Sequence[ScopeSpec]
) -> List[str]:
    deps: List[str] = [path for scope in scopes for path in scope.paths]
    deps.extend(results[0].dependency_paths)
    return deps


__all__ = ["ScopeMerger"]
