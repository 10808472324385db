"""Selector rewriting that nests a rule under a scope class."""

from __future__ import annotations

import re
from typing import Pattern, Sequence

from ..models import RuleFragment, ScopedFragment

# Selectors rooted at ``html`` stay global; ``@`` segments are at-rule preludes.
DEFAULT_EXEMPTIONS: Sequence[Pattern[str]] = (
    re.compile(r"html", re.IGNORECASE),
    re.compile(r"@"),
)


class SelectorScoper:
    """Prefixes every selector in a fragment's selector list with ``.<scope> ``."""

    def __init__(self, exemptions: Sequence[Pattern[str]] = DEFAULT_EXEMPTIONS) -> None:
        self.exemptions = tuple(exemptions)

    def scope(self, fragment: RuleFragment, scope_name: str) -> ScopedFragment:
        if not scope_name:
            return ScopedFragment(text=fragment.text, scope_name=scope_name, source=fragment)
        selector = fragment.selector
        rewritten = ",".join(self._prefix(segment, scope_name) for segment in selector.split(","))
        return ScopedFragment(
            text=rewritten + fragment.block,
            scope_name=scope_name,
            source=fragment,
        )

    def _prefix(self, segment: str, scope_name: str) -> str:
        body = segment.lstrip()
        if not body or any(pattern.match(body) for pattern in self.exemptions):
            return segment
        leading = segment[: len(segment) - len(body)]
        return f"{leading}.{scope_name} {body}"


__all__ = ["DEFAULT_EXEMPTIONS", "SelectorScoper"]
