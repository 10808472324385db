"""Flat CSS fragment handling."""

from .scoper import SelectorScoper
from .segmenter import FragmentSegmenter, segment

__all__ = ["FragmentSegmenter", "SelectorScoper", "segment"]
