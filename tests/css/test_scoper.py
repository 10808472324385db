"""Tests for scopedsass.css.scoper."""

from __future__ import annotations

from scopedsass.css.scoper import SelectorScoper
from scopedsass.css.segmenter import segment
from scopedsass.models import RuleFragment


def _fragment(text: str) -> RuleFragment:
    return RuleFragment(text=text, start=0, end=len(text))


def test_empty_scope_name_leaves_fragment_unchanged() -> None:
    fragment = _fragment(".btn, html .x {\n  color: red;\n}")

    scoped = SelectorScoper().scope(fragment, "")

    assert scoped.text == fragment.text
    assert scoped.source is fragment


def test_every_selector_in_the_list_is_prefixed() -> None:
    scoped = SelectorScoper().scope(_fragment(".btn, .link:hover,a{color:red}"), "theme-dark")

    assert scoped.text == ".theme-dark .btn, .theme-dark .link:hover,.theme-dark a{color:red}"


def test_html_rooted_selectors_are_not_prefixed() -> None:
    scoped = SelectorScoper().scope(_fragment("html, HTML body, .a {font-size: 14px}"), "t")

    assert scoped.text == "html, HTML body, .t .a {font-size: 14px}"


def test_leading_whitespace_stays_before_the_scope_class() -> None:
    css = ".a {\n  top: 0;\n}\n\nhtml .b,\n.c {\n  left: 0;\n}"
    second = segment(css)[1]

    scoped = SelectorScoper().scope(second, "s")

    assert scoped.text == "\n\nhtml .b,\n.s .c {\n  left: 0;\n}"


def test_declaration_block_is_never_rewritten() -> None:
    fragment = _fragment('.a, .b { background: url("x,y.png"); content: "a, b"; }')

    scoped = SelectorScoper().scope(fragment, "scope")

    assert scoped.text.endswith('{ background: url("x,y.png"); content: "a, b"; }')
    assert scoped.text.startswith(".scope .a, .scope .b ")


def test_at_rule_preludes_are_exempt() -> None:
    scoped = SelectorScoper().scope(_fragment("@font-face{font-family:X}"), "t")

    assert scoped.text == "@font-face{font-family:X}"
