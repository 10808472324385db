"""Splitting compiled CSS into flat rule fragments.

The compiler output is assumed to be fully expanded: rules are not nested,
and no comment straddles a rule boundary. Under that assumption a rule is
any run of characters without braces, slashes, backslashes or semicolons,
followed by a brace-delimited block that contains no braces of its own.
Rules inside an at-rule block (``@media``) are still found because the
at-rule's opening brace ends the run; the at-rule wrapper itself is never
a fragment.
"""

from __future__ import annotations

import re
from typing import List

from ..models import RuleFragment

FRAGMENT_PATTERN = re.compile(r"[^{}/\\;]+\{[^{}]*?\}")


class FragmentSegmenter:
    """Finds the ordered rule fragments of a compiled stylesheet."""

    pattern = FRAGMENT_PATTERN

    def segment(self, css: str) -> List[RuleFragment]:
        return [
            RuleFragment(text=match.group(0), start=match.start(), end=match.end())
            for match in self.pattern.finditer(css)
        ]


def segment(css: str) -> List[RuleFragment]:
    """Module-level shortcut for ``FragmentSegmenter().segment``."""
    return FragmentSegmenter().segment(css)


__all__ = ["FRAGMENT_PATTERN", "FragmentSegmenter", "segment"]
